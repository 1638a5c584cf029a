from pathlib import Path
from typing import List, Optional

from PyQt5.QtCore import QSize, Qt, pyqtSignal
from PyQt5.QtGui import QIcon, QPixmap
from PyQt5.QtWidgets import (
    QFileDialog,
    QHBoxLayout,
    QLabel,
    QListView,
    QListWidget,
    QListWidgetItem,
    QMainWindow,
    QMessageBox,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from MC_Libs.ImageEditingLib.image_models import EncodedImage, RawFile
from MC_Libs.SessionLib.session_controller import UploadSessionController
from MC_Libs.SessionLib.uploader_config import UploaderConfig
from MC_Libs.constants import (
    CROP_PREVIEW_HEIGHT,
    DEFAULT_WINDOW_HEIGHT,
    DEFAULT_WINDOW_WIDTH,
    FILE_DIALOG_FILTER,
    THUMBNAIL_SIZE,
)


class MultiCropWindow(QMainWindow):
    imagesUpdated = pyqtSignal(list)

    def __init__(self, config: UploaderConfig) -> None:
        super().__init__()
        self.setWindowTitle(f"Multi Crop - {config.max_images} image(s)")
        self.resize(DEFAULT_WINDOW_WIDTH, DEFAULT_WINDOW_HEIGHT)

        self.controller = UploadSessionController(
            config,
            on_images_update=self.imagesUpdated.emit,
            on_warning=self._show_warning,
        )

        self._build_ui()
        self._connect_signals()
        self.refresh()

    def _build_ui(self) -> None:
        central = QWidget(self)
        self.setCentralWidget(central)

        root = QVBoxLayout(central)

        upload_row = QHBoxLayout()
        crop_row = QHBoxLayout()
        edit_row = QHBoxLayout()

        self.btn_upload = QPushButton("Upload Images")
        self.label_remaining = QLabel("")
        self.btn_resume = QPushButton("Crop Remaining")

        self.label_crop_preview = QLabel("Crop Preview")
        self.label_crop_preview.setAlignment(Qt.AlignCenter)
        self.label_crop_preview.setMinimumHeight(CROP_PREVIEW_HEIGHT)
        self.label_crop_preview.setStyleSheet("border: 1px solid #888;")
        self.label_progress = QLabel("")
        self.btn_confirm_crop = QPushButton("Confirm Crop")

        self.finalized_list = QListWidget()
        self.finalized_list.setViewMode(QListView.IconMode)
        self.finalized_list.setIconSize(QSize(THUMBNAIL_SIZE, THUMBNAIL_SIZE))
        self.finalized_list.setResizeMode(QListView.Adjust)

        self.btn_remove = QPushButton("Remove")
        self.btn_rotate = QPushButton("Rotate")
        self.btn_flip = QPushButton("Flip")
        self.btn_recrop = QPushButton("Re-crop from Original")

        upload_row.addWidget(self.btn_upload)
        upload_row.addWidget(self.label_remaining)
        upload_row.addWidget(self.btn_resume)

        crop_row.addWidget(self.label_progress)
        crop_row.addWidget(self.btn_confirm_crop)

        edit_row.addWidget(self.btn_remove)
        edit_row.addWidget(self.btn_rotate)
        edit_row.addWidget(self.btn_flip)
        edit_row.addWidget(self.btn_recrop)

        root.addLayout(upload_row)
        root.addWidget(self.label_crop_preview, stretch=2)
        root.addLayout(crop_row)
        root.addWidget(QLabel("Cropped Images"))
        root.addWidget(self.finalized_list, stretch=1)
        root.addLayout(edit_row)

    def _connect_signals(self) -> None:
        self.btn_upload.clicked.connect(self.upload_images)
        self.btn_resume.clicked.connect(self.resume_cropping)
        self.btn_confirm_crop.clicked.connect(self.confirm_crop)
        self.btn_remove.clicked.connect(self.remove_selected)
        self.btn_rotate.clicked.connect(lambda: self.edit_selected("rotate", degrees=90))
        self.btn_flip.clicked.connect(lambda: self.edit_selected("flip", direction="horizontal"))
        self.btn_recrop.clicked.connect(lambda: self.edit_selected("recrop"))

    def upload_images(self) -> None:
        file_paths, _ = QFileDialog.getOpenFileNames(self, "Select Images", "", FILE_DIALOG_FILTER)
        if not file_paths:
            return

        files: List[RawFile] = []
        for path_str in file_paths:
            try:
                files.append(RawFile.from_path(Path(path_str)))
            except OSError as e:
                self._show_warning(f"Could not read {path_str}: {e}")

        self.controller.add_files(files)
        self.refresh()

    def confirm_crop(self) -> None:
        if not self.controller.session.is_cropping:
            return
        self.controller.confirm_crop()
        self.refresh()

    def resume_cropping(self) -> None:
        self.controller.resume_cropping()
        self.refresh()

    def remove_selected(self) -> None:
        slot_id = self._selected_slot_id()
        if slot_id is None:
            return
        self.controller.remove(slot_id)
        self.refresh()

    def edit_selected(self, operation: str, **kwargs) -> None:
        slot_id = self._selected_slot_id()
        if slot_id is None:
            return
        self.controller.edit_slot(slot_id, operation, **kwargs)
        self.refresh()

    def _selected_slot_id(self) -> Optional[int]:
        item = self.finalized_list.currentItem()
        if item is None:
            return None
        return item.data(Qt.UserRole)

    def refresh(self) -> None:
        session = self.controller.session
        cropping = session.is_cropping
        has_uncropped = session.finalized_count < len(session)

        self.btn_upload.setVisible(self.controller.can_upload)
        self.label_remaining.setText(f"{self.controller.remaining_slots} images remaining")
        self.btn_resume.setVisible(not cropping and has_uncropped)

        self.label_crop_preview.setVisible(cropping)
        self.label_progress.setVisible(cropping)
        self.btn_confirm_crop.setVisible(cropping)
        if cropping:
            active = session.get_slot(session.active_slot_id)
            self._set_preview(self.label_crop_preview, active.original)
            self.label_progress.setText(self.controller.progress_text)

        self.finalized_list.clear()
        for slot in session.slots:
            if slot.finalized is None:
                continue
            item = QListWidgetItem(QIcon(self._to_pixmap(slot.finalized)), "")
            item.setData(Qt.UserRole, slot.slot_id)
            self.finalized_list.addItem(item)
        self.finalized_list.setVisible(not cropping)

    def _set_preview(self, label: QLabel, image: EncodedImage) -> None:
        pixmap = self._to_pixmap(image)
        if pixmap.isNull():
            label.setText("Preview failed")
            return

        scaled = pixmap.scaled(
            label.size(),
            Qt.AspectRatioMode.KeepAspectRatio,
            Qt.TransformationMode.SmoothTransformation,
        )
        label.setPixmap(scaled)

    def _to_pixmap(self, image: EncodedImage) -> QPixmap:
        pixmap = QPixmap()
        pixmap.loadFromData(image.data)
        return pixmap

    def _show_warning(self, message: str) -> None:
        QMessageBox.warning(self, "Upload", message)
