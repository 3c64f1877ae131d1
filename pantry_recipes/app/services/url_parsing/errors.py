"""Exceptions raised while extracting recipes and parsing ingredient lines."""


class RecipeExtractionError(Exception):
    """A recipe page could not be turned into structured data."""

    def __init__(self, link: str, reason: str):
        self.link = link
        self.reason = reason
        super().__init__(self.describe())

    def describe(self) -> str:
        return f"Could not process {self.link}: {self.reason}"


class LinkUnavailableError(RecipeExtractionError):
    """The page could not be fetched (transport error, bad status, timeout)."""

    def describe(self) -> str:
        return f"Could not GET {self.link}: {self.reason}"


class BadFormatError(RecipeExtractionError):
    """The page was fetched but holds no recognizable recipe data."""

    def describe(self) -> str:
        return f"Could not parse response from {self.link}: {self.reason}"


class IngredientParseError(ValueError):
    """Local failure inside the ingredient-line parser; always recovered."""


class UnknownUnitError(IngredientParseError):
    def __init__(self, unit: str):
        self.unit = unit
        super().__init__(f"Could not parse unit: unknown unit {unit!r}")


class AmountError(IngredientParseError):
    pass


class NoAmountError(AmountError):
    def __init__(self):
        super().__init__("No amount present")


class MalformedAmountError(AmountError):
    def __init__(self, token: str, reason: str):
        self.token = token
        super().__init__(f"Malformed amount {token!r}: {reason}")
