"""
Input errors raised while checking the text fields.
"""


class InputError(ValueError):
    """
    A text field failed validation.

    Attributes:
        field: "vector" or "matrix", the input that should get focus back.
        reason: "count" when the number of tokens is wrong,
                "non_numeric" when a token is not a number.
    """

    def __init__(self, field: str, reason: str, message: str):
        super().__init__(message)
        self.field = field
        self.reason = reason
        self.message = message
