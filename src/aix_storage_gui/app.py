import faulthandler
import logging
import sys

from PySide6.QtWidgets import QApplication

from aix_storage_gui.gui.main_window import MainWindow
from aix_storage_gui.services.config_service import ConfigService


def run() -> None:
    faulthandler.enable()
    config = ConfigService().load_app_config()
    logging.basicConfig(
        level=getattr(logging, config.log_level, logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = QApplication(sys.argv)
    app.setApplicationName("AIX Storage Explorer")

    w = MainWindow(config)
    w.show()

    raise SystemExit(app.exec())


if __name__ == "__main__":
    run()
