from __future__ import annotations

from dataclasses import dataclass, field

CATEGORY_STALE = "stale-partition"
CATEGORY_QUORUM = "quorum-disabled"
CATEGORY_PATH = "path-failed"
CATEGORY_PAGING = "paging-full"
CATEGORY_CAPACITY = "capacity-full"
CATEGORY_DISK_ERROR = "disk-error"


@dataclass(frozen=True)
class HealthIssue:
    category: str
    severity: str
    description: str


@dataclass(frozen=True)
class HealthReport:
    issues: list[HealthIssue] = field(default_factory=list)

    @property
    def issue_count(self) -> int:
        return len(self.issues)

    @property
    def passed(self) -> bool:
        return not self.issues

    def by_category(self, category: str) -> list[HealthIssue]:
        return [i for i in self.issues if i.category == category]


@dataclass(frozen=True)
class SearchHit:
    category: str
    label: str
