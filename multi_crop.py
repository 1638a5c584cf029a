import logging
import sys
from pathlib import Path

from PyQt5.QtWidgets import QApplication

from MC_Libs.SessionLib.uploader_config import UploaderConfig, load_uploader_config
from MC_Libs.UploaderLib.uploader_window import MultiCropWindow

DEFAULT_CONFIG = UploaderConfig(max_width=10.0, max_height=10.0, max_images=3)


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    app = QApplication(sys.argv)
    config = load_uploader_config(Path(sys.argv[1])) if len(sys.argv) > 1 else DEFAULT_CONFIG
    window = MultiCropWindow(config)
    window.imagesUpdated.connect(
        lambda images: logging.getLogger("multi_crop").info(f"{len(images)} finalized image(s)")
    )
    window.show()
    sys.exit(app.exec_())


if __name__ == "__main__":
    main()
