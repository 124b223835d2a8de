"""Unit tests for the rich displays used by the diagnostic CLI."""

from rich.console import Console

from cofi.displays.ranking_display import display_ranking
from cofi.models.filter_state import FilterResult, RankedWindow

from ..helpers import make_window


def render(result, query):
    console = Console(record=True, width=200)
    display_ranking(result, query, console)
    return console.export_text()


class TestDisplayRanking:
    """Test the Windows tab table."""

    def test_query_with_markup_shown_literally(self):
        """Test brackets in the query are not parsed as rich markup."""
        text = render(FilterResult(), "[red]x")

        assert "Windows matching '[red]x'" in text

    def test_title_with_markup_shown_literally(self):
        """Test window titles are escaped too."""
        row = RankedWindow(window=make_window(1, "[bold]notes", "Gedit"))
        text = render(FilterResult(items=[row], selected_index=0), "")

        assert "[bold]notes" in text
        assert "Selected:" in text
