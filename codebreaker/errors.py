"""
Guess validation errors.

Both are caller-input problems: the session is left untouched and the caller
can simply try again with corrected text. They subclass ValueError so code
that already catches ValueError (like the API routes) keeps working.
"""

ILLEGAL_LENGTH_MESSAGE = "Invalid guess length: required={required}, provided={provided}"
ILLEGAL_CHARACTER_MESSAGE = "Guess includes invalid characters: required={pool}; provided={text}."


class InvalidGuess(ValueError):
    """Base class for a rejected guess."""

    kind = "invalid_guess"

    def to_detail(self) -> dict:
        return {"error": self.kind, "message": str(self)}


class InvalidGuessLength(InvalidGuess):
    kind = "invalid_length"

    def __init__(self, required: int, provided: int):
        self.required = required
        self.provided = provided
        super().__init__(ILLEGAL_LENGTH_MESSAGE.format(required=required, provided=provided))

    def to_detail(self) -> dict:
        detail = super().to_detail()
        detail["required"] = self.required
        detail["provided"] = self.provided
        return detail


class InvalidGuessCharacter(InvalidGuess):
    kind = "invalid_character"

    def __init__(self, pool: str, text: str):
        self.pool = pool
        self.text = text
        super().__init__(ILLEGAL_CHARACTER_MESSAGE.format(pool=pool, text=text))

    def to_detail(self) -> dict:
        detail = super().to_detail()
        detail["pool"] = self.pool
        detail["text"] = self.text
        return detail
