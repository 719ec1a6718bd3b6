"""Data models for Cognita."""

from dataclasses import dataclass

from cognita.errors import TagInvalidError

TAG_SEPARATOR = ":"


@dataclass(frozen=True)
class Tag:
    """Key/value tag used to match cloud resources."""

    name: str
    value: str

    @classmethod
    def from_string(cls, raw: str) -> "Tag":
        """Parse a tag from its 'NAME:VALUE' form.

        The value may itself contain ':' characters.

        Raises:
            TagInvalidError: If the separator is missing or the name is empty.
        """
        name, sep, value = raw.partition(TAG_SEPARATOR)
        if not sep or not name:
            raise TagInvalidError(raw)
        return cls(name=name, value=value)

    def __str__(self) -> str:
        return f"{self.name}{TAG_SEPARATOR}{self.value}"
