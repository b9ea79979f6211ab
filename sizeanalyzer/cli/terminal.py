"""Terminal report of size-saving suggestions."""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Sequence

from rich.console import Console
from rich.text import Text

from sizeanalyzer.suggesters.base import Category, Suggestion

_PREFIXES = "kMGTPE"

CATEGORY_HEADLINES = {
    Category.LARGE_FILES: "Dynamically delivering large files saves up to ",
    Category.PROGUARD: "Efficiently configuring proguard can save up to ",
    Category.BUNDLE_CONFIG: "Configuring App Bundle splits can save up to ",
}


def human_readable_byte_count(num_bytes: Optional[int]) -> str:
    """Format a byte count with binary prefixes, e.g. ``1.5 kiB``."""
    if not num_bytes:
        return "unknown bytes"
    unit = 1024
    if num_bytes < unit:
        return f"{num_bytes} B"
    exp = 1
    while exp < len(_PREFIXES) and num_bytes >= unit ** (exp + 1):
        exp += 1
    prefix = _PREFIXES[exp - 1] + "i"
    return f"{num_bytes / unit ** exp:.1f} {prefix}B"


def total_bytes_saved(suggestions: Iterable[Suggestion]) -> int:
    return sum(suggestion.bytes_saved for suggestion in suggestions)


class TerminalReport:
    """Groups suggestions by category and prints a savings summary.

    Args:
        suggestions: Everything the analyzer found.
        categories: Category names to display; empty means all. Unknown
            names are ignored.
        display_details: Print every suggestion under its category headline.
        console: Output console; a new stdout console when omitted.
    """

    def __init__(
        self,
        suggestions: Sequence[Suggestion],
        categories: Sequence[str] = (),
        display_details: bool = False,
        console: Optional[Console] = None,
    ) -> None:
        self.suggestions = list(suggestions)
        known = {category.value: category for category in Category}
        self.display_categories = [known[name] for name in categories if name in known]
        self.display_details = display_details
        self.console = console or Console()

    def categorize(self) -> Dict[Category, List[Suggestion]]:
        """Suggestions per displayed category, largest savings first."""
        selected = [
            suggestion
            for suggestion in self.suggestions
            if not self.display_categories
            or suggestion.category in self.display_categories
        ]
        selected.sort(key=lambda suggestion: suggestion.bytes_saved, reverse=True)
        categorized: Dict[Category, List[Suggestion]] = {}
        for suggestion in selected:
            categorized.setdefault(suggestion.category, []).append(suggestion)
        return categorized

    @staticmethod
    def category_display_order(
        categorized: Dict[Category, List[Suggestion]]
    ) -> List[Category]:
        return sorted(
            categorized,
            key=lambda category: total_bytes_saved(categorized[category]),
            reverse=True,
        )

    def display(self) -> None:
        categorized = self.categorize()
        if not categorized:
            self.console.print("No size saving suggestions found.")
            return

        running_total = 0
        for category in self.category_display_order(categorized):
            suggestions = categorized[category]
            savings = total_bytes_saved(suggestions)
            self.console.print(
                Text.assemble(
                    (CATEGORY_HEADLINES[category], "green"),
                    (human_readable_byte_count(savings), "red"),
                ),
                soft_wrap=True,
            )
            if self.display_details:
                for suggestion in suggestions:
                    self._print_suggestion(suggestion)
            running_total += savings

        self.console.print(
            Text.assemble(
                ("Total size savings of ", "green"),
                (human_readable_byte_count(running_total), "red"),
                " found.",
            ),
            soft_wrap=True,
        )
        if not self.display_details:
            self.console.print(
                "The -d flag will display a list of individual suggestions for each category.",
                soft_wrap=True,
            )

    def _print_suggestion(self, suggestion: Suggestion) -> None:
        saved = human_readable_byte_count(suggestion.estimated_bytes_saved)
        self.console.print(
            Text.assemble(suggestion.message, (f" (saves {saved})", "red")),
            soft_wrap=True,
        )


__all__ = ["CATEGORY_HEADLINES", "TerminalReport", "human_readable_byte_count"]
