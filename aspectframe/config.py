"""Настройки приложения.

Значения по умолчанию для загрузки, рамки, заливки и экспорта.
Файлы конфигурации не читаются: всё состояние сессии живёт в памяти.
"""

CONFIG = {
    'upload': {
        'allowed_media_types': ('image/jpeg', 'image/png'),
        'decode_formats': ('JPEG', 'PNG'),
        'decode_workers': 1,
    },
    'border': {
        'min_width': 0,
        'max_width': 200,
        'default_width': 0,
        'default_color': '#FFFFFF',
    },
    'fill': {
        'default_style': 'solid',
        'gradient_color_a': '#FFFFFF',
        'gradient_color_b': '#000000',
    },
    'export': {
        'default_filename': 'instagram_bordered_image.png',
    },
    'debug': {
        'verbose_logging': False,
    },
}
