"""Боковая панель: открытие файла, информация, параметры рамки и кнопки пропорций.

Принципы:
- SRP: управляет только UI параметров, не содержит алгоритмов.
- ISP: выдаёт параметры через компактные методы `set_*`, события через `on_*`.
"""
from __future__ import annotations

from typing import Callable, Dict, Optional

import customtkinter as ctk

from aspectframe.config import CONFIG
from aspectframe.models.fill_model import FillStyle
from aspectframe.models.image_model import ImageSource, TargetRatio


def format_size(size_bytes: Optional[int]) -> str:
    """Человекочитаемый размер файла."""
    if size_bytes is None:
        return "—"
    thresholds = [("Б", 1024), ("КБ", 1024**2), ("МБ", 1024**3), ("ГБ", 1024**4)]
    for label, limit in thresholds:
        if size_bytes < limit:
            if label == "Б":
                return f"{size_bytes} {label}"
            value = size_bytes / (limit // 1024)
            return f"{value:.1f} {label}"
    value = size_bytes / (1024**4)
    return f"{value:.1f} ГБ"


class Sidebar(ctk.CTkFrame):
    """Панель инструментов с блоками: файл, информация, рамка, пропорции."""
    def __init__(self, master: ctk.CTk, **kwargs) -> None:
        super().__init__(master, width=280, **kwargs)

        self.grid_columnconfigure(0, weight=1)

        # Callbacks
        self.on_open_file: Optional[Callable[[], None]] = None
        self.on_fill_style_change: Optional[Callable[[str], None]] = None
        self.on_pick_color: Optional[Callable[[str], None]] = None  # slot: "border" | "a" | "b"
        self.on_border_width_change: Optional[Callable[[int], None]] = None
        self.on_process: Optional[Callable[[TargetRatio], None]] = None

        # Controls
        self._title = ctk.CTkLabel(self, text="Инструменты", font=ctk.CTkFont(size=16, weight="bold"))
        self._title.grid(row=0, column=0, padx=8, pady=(8, 4), sticky="w")

        self._open_btn = ctk.CTkButton(self, text="Открыть изображение…", command=self._emit_open_file)
        self._open_btn.grid(row=1, column=0, padx=8, pady=(0, 12), sticky="ew")

        # Info section
        self._info_title = ctk.CTkLabel(self, text="Информация", font=ctk.CTkFont(size=16, weight="bold"))
        self._info_title.grid(row=2, column=0, padx=8, pady=(8, 4), sticky="w")

        self._name_val = ctk.StringVar(value="—")
        self._size_val = ctk.StringVar(value="—")
        self._dims_val = ctk.StringVar(value="—")
        self._type_val = ctk.StringVar(value="—")

        self._info_name = ctk.CTkLabel(self, textvariable=self._name_val, wraplength=250, anchor="w", justify="left")
        self._info_size = ctk.CTkLabel(self, textvariable=self._size_val, anchor="w", justify="left")
        self._info_dims = ctk.CTkLabel(self, textvariable=self._dims_val, anchor="w", justify="left")
        self._info_type = ctk.CTkLabel(self, textvariable=self._type_val, anchor="w", justify="left")

        self._info_name.grid(row=3, column=0, padx=8, pady=(0, 2), sticky="ew")
        self._info_size.grid(row=4, column=0, padx=8, pady=(0, 2), sticky="ew")
        self._info_dims.grid(row=5, column=0, padx=8, pady=(0, 2), sticky="ew")
        self._info_type.grid(row=6, column=0, padx=8, pady=(0, 10), sticky="ew")

        # Border section
        self._border_title = ctk.CTkLabel(self, text="Рамка", font=ctk.CTkFont(size=16, weight="bold"))
        self._border_title.grid(row=7, column=0, padx=8, pady=(8, 4), sticky="w")

        self._style_by_label: Dict[str, str] = {s.label: s.value for s in FillStyle}
        self._style_menu = ctk.CTkOptionMenu(
            self, values=list(self._style_by_label), command=self._emit_fill_style_change
        )
        self._style_menu.set(FillStyle(CONFIG['fill']['default_style']).label)
        self._style_menu.grid(row=8, column=0, padx=8, pady=(0, 6), sticky="ew")

        self._color_buttons: Dict[str, ctk.CTkButton] = {
            "border": ctk.CTkButton(self, text="Цвет рамки", command=lambda: self._emit_pick_color("border")),
            "a": ctk.CTkButton(self, text="Первый цвет градиента", command=lambda: self._emit_pick_color("a")),
            "b": ctk.CTkButton(self, text="Второй цвет градиента", command=lambda: self._emit_pick_color("b")),
        }
        self.set_color_value("border", CONFIG['border']['default_color'])
        self.set_color_value("a", CONFIG['fill']['gradient_color_a'])
        self.set_color_value("b", CONFIG['fill']['gradient_color_b'])
        self._toggle_color_controls(CONFIG['fill']['default_style'])

        lo, hi = CONFIG['border']['min_width'], CONFIG['border']['max_width']
        self._width_val = ctk.StringVar(value=f"{CONFIG['border']['default_width']} px")
        self._width_label = ctk.CTkLabel(self, text="Толщина рамки:")
        self._width_slider = ctk.CTkSlider(self, from_=lo, to=hi, number_of_steps=hi - lo, command=self._on_width_change)
        self._width_slider.set(CONFIG['border']['default_width'])
        self._width_value = ctk.CTkLabel(self, textvariable=self._width_val, width=48, anchor="w")
        self._width_label.grid(row=12, column=0, padx=8, pady=(6, 2), sticky="w")
        self._width_slider.grid(row=13, column=0, padx=8, pady=(0, 2), sticky="ew")
        self._width_value.grid(row=14, column=0, padx=8, pady=(0, 8), sticky="w")

        # filler
        self.grid_rowconfigure(99, weight=1)

        # Ratio buttons, disabled until an image is loaded
        self._ratio_title = ctk.CTkLabel(self, text="Пропорции", font=ctk.CTkFont(size=16, weight="bold"))
        self._ratio_title.grid(row=20, column=0, padx=8, pady=(8, 4), sticky="w")
        self._ratio_buttons: Dict[TargetRatio, ctk.CTkButton] = {}
        for i, ratio in enumerate(TargetRatio):
            btn = ctk.CTkButton(self, text=ratio.label, state="disabled", command=lambda r=ratio: self._emit_process(r))
            btn.grid(row=21 + i, column=0, padx=8, pady=(0, 6), sticky="ew")
            self._ratio_buttons[ratio] = btn

    # ---- Public API ----
    def set_image_info(self, image: Optional[ImageSource]) -> None:
        """Отображает метаданные загруженного изображения (None — очистить)."""
        if image is None:
            for var in (self._name_val, self._size_val, self._dims_val, self._type_val):
                var.set("—")
            return
        self._name_val.set(image.name or "—")
        self._size_val.set(format_size(image.size_bytes))
        self._dims_val.set(f"{image.width} × {image.height} px")
        self._type_val.set(image.media_type)

    def set_color_value(self, slot: str, hex_color: str) -> None:
        """Красит кнопку выбора цвета в выбранный цвет."""
        self._color_buttons[slot].configure(fg_color=hex_color, hover_color=hex_color, text_color=_contrast_text(hex_color))

    def set_ratio_buttons_enabled(self, enabled: bool) -> None:
        for btn in self._ratio_buttons.values():
            btn.configure(state="normal" if enabled else "disabled")

    def set_loading(self, loading: bool) -> None:
        self._open_btn.configure(text="Загрузка…" if loading else "Открыть изображение…")

    # ---- Events ----
    def _emit_open_file(self) -> None:
        if self.on_open_file:
            self.on_open_file()

    def _emit_fill_style_change(self, label: str) -> None:
        style = self._style_by_label.get(label, label)
        self._toggle_color_controls(style)
        if self.on_fill_style_change:
            self.on_fill_style_change(style)

    def _emit_pick_color(self, slot: str) -> None:
        if self.on_pick_color:
            self.on_pick_color(slot)

    def _on_width_change(self, value: float) -> None:
        width = int(round(value))
        self._width_val.set(f"{width} px")
        if self.on_border_width_change:
            self.on_border_width_change(width)

    def _emit_process(self, ratio: TargetRatio) -> None:
        if self.on_process:
            self.on_process(ratio)

    # ---- Helpers ----
    def _toggle_color_controls(self, style: str) -> None:
        gradient = style.startswith("gradient")
        if gradient:
            self._color_buttons["border"].grid_remove()
            self._color_buttons["a"].grid(row=10, column=0, padx=8, pady=(0, 4), sticky="ew")
            self._color_buttons["b"].grid(row=11, column=0, padx=8, pady=(0, 4), sticky="ew")
        else:
            self._color_buttons["border"].grid(row=9, column=0, padx=8, pady=(0, 4), sticky="ew")
            self._color_buttons["a"].grid_remove()
            self._color_buttons["b"].grid_remove()


def _contrast_text(hex_color: str) -> str:
    r, g, b = (int(hex_color[i:i + 2], 16) for i in (1, 3, 5))
    return "#000000" if (0.299 * r + 0.587 * g + 0.114 * b) > 150 else "#FFFFFF"
