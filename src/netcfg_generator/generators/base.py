"""Base generator class for configuration file rendering."""

from abc import ABC, abstractmethod
from datetime import date


class BaseGenerator(ABC):
    """Base class for configuration file generators.

    Subclasses implement generate() to produce the output document line by
    line. Generators only read their inputs, so calling render() twice on
    the same inputs gives the same text.
    """

    def __init__(self, generated_on: date | None = None) -> None:
        """Initialize generator.

        Args:
            generated_on: Date written into the header (default: today)
        """
        self.generated_on = generated_on or date.today()

    @property
    def date_str(self) -> str:
        """Generation date as YYYY-MM-DD."""
        return self.generated_on.isoformat()

    @abstractmethod
    def generate(self) -> list[str]:
        """Generate the configuration document.

        Returns:
            Output lines, without trailing newlines
        """
        pass

    def render(self) -> str:
        """Return the generated document as text ending in a single newline."""
        return "\n".join(self.generate()).rstrip("\n") + "\n"
