"""Centralized styles for the learner window and toasts."""

from .color_palette import ColorPalette, Theme


class Styles:
    """Helper class to generate Qt stylesheets based on the current theme."""

    @staticmethod
    def get_main_window_style(theme: Theme = Theme.LIGHT) -> str:
        return f"""
            QMainWindow, QWidget {{
                background-color: {ColorPalette.BACKGROUND_PRIMARY.get(theme)};
                color: {ColorPalette.TEXT_PRIMARY.get(theme)};
                font-family: 'Segoe UI', 'Roboto', sans-serif;
                font-size: 14px;
            }}
            QPushButton {{
                background-color: {ColorPalette.BUTTON_SECONDARY_BG.get(theme)};
                color: {ColorPalette.TEXT_PRIMARY.get(theme)};
                border: 1px solid {ColorPalette.BORDER_PRIMARY.get(theme)};
                border-radius: 4px;
                padding: 6px 12px;
            }}
            QPushButton:hover {{
                background-color: {ColorPalette.BUTTON_HOVER_BG.get(theme)};
            }}
            QPushButton:checked {{
                background-color: {ColorPalette.BUTTON_PRIMARY_BG.get(theme)};
                color: {ColorPalette.BUTTON_PRIMARY_TEXT.get(theme)};
                border: 1px solid {ColorPalette.BUTTON_PRIMARY_BG.get(theme)};
            }}
        """

    @staticmethod
    def get_option_feedback_style(correct: bool, theme: Theme = Theme.LIGHT) -> str:
        color = ColorPalette.SUCCESS.get(theme) if correct else ColorPalette.ERROR.get(theme)
        return f"QPushButton {{ border: 2px solid {color}; font-weight: bold; }}"

    @staticmethod
    def get_timer_label_style(urgent: bool, theme: Theme = Theme.LIGHT) -> str:
        base_style = "padding: 2px 6px; border-radius: 4px;"
        if not urgent:
            return base_style
        return base_style + f" color: #fff; background-color: {ColorPalette.ERROR.get(theme)};"

    @staticmethod
    def get_toast_style(is_badge: bool, theme: Theme = Theme.LIGHT) -> str:
        palette_entry = ColorPalette.ACCENT_SECONDARY if is_badge else ColorPalette.ACCENT_PRIMARY
        return (
            f"background-color: {palette_entry.get(theme)};"
            f" color: {ColorPalette.TEXT_ON_ACCENT.get(theme)};"
            " border-radius: 8px; padding: 10px 14px; font-size: 13pt;"
        )
