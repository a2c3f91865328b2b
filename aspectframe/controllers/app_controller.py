"""Контроллер приложения: оркестрация UI и сервисов.

SOLID:
- SRP: класс управляет связями между UI и сервисами (без геометрии и отрисовки).
- DIP: зависит от сервисов как от ролей; состояние сессии передаётся им явно.
Clean Code:
- Обработчики компактны; тяжёлая логика вынесена в сервисы.
- Любая ошибка сервиса показывается пользователю, сессия остаётся прежней.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from tkinter import colorchooser, filedialog, messagebox, TclError
from typing import Optional

import customtkinter as ctk

from aspectframe.config import CONFIG
from aspectframe.errors import AspectFrameError
from aspectframe.logger import get_logger
from aspectframe.models.image_model import TargetRatio
from aspectframe.models.session_model import SessionState
from aspectframe.services.composition_service import CompositionService
from aspectframe.services.fill_service import FillRenderer
from aspectframe.services.image_service import DecodeTicket, ImageLoader
from aspectframe.services.render_service import save_png
from aspectframe.ui.image_viewer import ImageViewer
from aspectframe.ui.sidebar import Sidebar
from aspectframe.ui.bottom_bar import BottomBar

logger = get_logger(__name__)

_POLL_MS = 50


@dataclass
class AppController:
    """Связывает элементы UI с прикладной логикой.

    Ответственности:
    - Инициализация и бинд событий (UI -> контроллер).
    - Фоновая загрузка изображений через `ImageLoader` (последняя загрузка выигрывает).
    - Обработка по нажатию кнопки пропорции через `CompositionService`.
    - Сохранение результата в PNG.
    """
    viewer: ImageViewer
    sidebar: Sidebar
    bottom: BottomBar
    window: ctk.CTk

    session: SessionState = field(default_factory=SessionState)
    _loader: ImageLoader = field(default_factory=ImageLoader)
    _composition_service: CompositionService = field(
        default_factory=lambda: CompositionService(FillRenderer(CONFIG['border']['default_color']))
    )
    _pending: Optional[DecodeTicket] = None

    def bind_events(self) -> None:
        """Регистрирует обработчики событий между UI-компонентами.

        Сохраняет слабую связность: компоненты UI ничего не знают друг о друге,
        общаются через контроллер.
        """
        self.sidebar.on_open_file = self._handle_open_file
        self.sidebar.on_fill_style_change = self._handle_fill_style_change
        self.sidebar.on_pick_color = self._handle_pick_color
        self.sidebar.on_border_width_change = self._handle_border_width_change
        self.sidebar.on_process = self._handle_process

        self.viewer.on_zoom_change = self._handle_viewer_zoom_changed

        # Bottom bar bindings
        self.bottom.on_zoom_change = self._handle_zoom_change
        self.bottom.on_zoom_preset = self._handle_zoom_change
        self.bottom.on_zoom_fit = self._handle_zoom_fit
        self.bottom.on_save = self._handle_save

    def shutdown(self) -> None:
        self._loader.shutdown()

    # ---- Handlers ----
    def _handle_open_file(self) -> None:
        try:
            file_path = filedialog.askopenfilename(
                title="Выберите изображение",
                filetypes=(
                    ("Images", "*.png *.jpg *.jpeg"),
                    ("All files", "*.*"),
                ),
            )
        except TclError:
            # Silent fail if dialog cannot open
            return

        if not file_path:
            return

        try:
            self._pending = self._loader.submit(file_path)
        except AspectFrameError as exc:
            self._report_error("Неподдерживаемый файл", exc)
            return
        self.sidebar.set_loading(True)
        self.bottom.set_status(f"Загрузка {self._pending.name}…")
        self.window.after(_POLL_MS, self._poll_decode, self._pending)

    def _poll_decode(self, ticket: DecodeTicket) -> None:
        if not ticket.done():
            self.window.after(_POLL_MS, self._poll_decode, ticket)
            return
        if ticket is self._pending:
            self._pending = None
            self.sidebar.set_loading(False)
        try:
            image = self._loader.resolve(ticket)
        except AspectFrameError as exc:
            self._report_error("Ошибка загрузки изображения. Попробуйте другой файл", exc)
            return
        if image is None:
            return

        self.session.replace_image(image)
        self.viewer.set_image(image.pil_image)
        self.sidebar.set_image_info(image)
        self.sidebar.set_ratio_buttons_enabled(True)
        self.bottom.set_save_enabled(False)
        self.bottom.set_status(f"{image.width} × {image.height} px — выберите пропорции")
        self._sync_zoom()

    def _handle_fill_style_change(self, style: str) -> None:
        self.session.fill_style = style

    def _handle_pick_color(self, slot: str) -> None:
        current = {
            "border": self.session.border_color,
            "a": self.session.gradient_color_a,
            "b": self.session.gradient_color_b,
        }[slot]
        try:
            _rgb, hex_color = colorchooser.askcolor(color=current, title="Выберите цвет")
        except TclError:
            return
        if not hex_color:
            return
        try:
            if slot == "border":
                self.session.set_border_color(hex_color)
            elif slot == "a":
                self.session.set_gradient_colors(color_a=hex_color)
            else:
                self.session.set_gradient_colors(color_b=hex_color)
        except AspectFrameError as exc:
            self._report_error("Некорректный цвет", exc)
            return
        self.sidebar.set_color_value(slot, hex_color)

    def _handle_border_width_change(self, width: int) -> None:
        self.session.set_border_width(width)

    def _handle_process(self, ratio: TargetRatio) -> None:
        if not self.session.has_image:
            return
        try:
            processed = self._composition_service.process(self.session, ratio)
        except AspectFrameError as exc:
            self._report_error("Не удалось обработать изображение", exc)
            return
        self.viewer.set_processed_image(processed.to_image())
        self.bottom.set_save_enabled(True)
        w, h = processed.size
        self.bottom.set_status(f"{ratio.label}: {w} × {h} px")
        self._sync_zoom()

    def _handle_save(self) -> None:
        processed = self.session.processed
        if processed is None:
            return
        try:
            file_path = filedialog.asksaveasfilename(
                title="Сохранить изображение",
                initialfile=processed.filename,
                defaultextension=".png",
                filetypes=(("PNG", "*.png"),),
            )
        except TclError:
            return
        if not file_path:
            return
        try:
            save_png(processed, file_path)
        except OSError as exc:
            self._report_error("Не удалось сохранить файл", exc)
            return
        self.bottom.set_status(f"Сохранено: {file_path}")

    def _handle_zoom_change(self, zoom_percent: int) -> None:
        self.viewer.set_zoom_percent(zoom_percent)

    def _handle_viewer_zoom_changed(self, zoom_percent: int) -> None:
        # Sync slider/value when user zooms with mouse wheel
        self.bottom.set_zoom_percent(zoom_percent)

    def _handle_zoom_fit(self) -> None:
        self.viewer.set_zoom_to_fit()
        self._sync_zoom()

    # ---- Helpers ----
    def _sync_zoom(self) -> None:
        self.bottom.set_zoom_percent(self.viewer.get_zoom_percent())

    def _report_error(self, title: str, exc: Exception) -> None:
        logger.error(f"{title}: {exc}", exc_info=not isinstance(exc, AspectFrameError))
        self.bottom.set_status(title)
        try:
            messagebox.showerror(title, str(exc), parent=self.window)
        except TclError:
            pass
