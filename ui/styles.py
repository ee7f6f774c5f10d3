from rich.style import Style
from rich.text import Text

from models import WordStatus

SKY_BLUE = "#1185FE"
SUN_GOLD = "#F1C40F"
SUCCESS_GREEN = "#27AE60"
ERROR_RED = "#C0392B"
INFO_BLUE = "#3498DB"
MUTED_GRAY = "#7F8C8D"
TEXT_WHITE = "#FFFFFF"


def get_accuracy_style(accuracy: float) -> Style:
    """Get color style based on an accuracy ratio."""
    if accuracy >= 0.8:
        return Style(color=SUCCESS_GREEN, bold=True)
    elif accuracy >= 0.5:
        return Style(color=SUN_GOLD)
    else:
        return Style(color=ERROR_RED)


def get_status_style(status: WordStatus) -> Style:
    """Get style for a word status."""
    styles = {
        WordStatus.UNKNOWN: Style(color=ERROR_RED, bold=True),
        WordStatus.LEARNING: Style(color=SUN_GOLD, bold=True),
        WordStatus.KNOWN: Style(color=SUCCESS_GREEN, bold=True),
    }
    return styles.get(status, Style())


def create_welcome_banner() -> Text:
    """Create the welcome banner text."""
    banner = Text()
    banner.append("╔══════════════════════════════════╗\n", Style(color=SKY_BLUE))
    banner.append("║          Vocabulary Quiz         ║\n", Style(color=SUN_GOLD, bold=True))
    banner.append("╚══════════════════════════════════╝", Style(color=SKY_BLUE))
    return banner
