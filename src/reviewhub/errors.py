"""Application-level exceptions that have no protean counterpart."""


class ForbiddenError(Exception):
    """The caller is authenticated but does not own the resource it tries to change.

    Carries field-keyed messages in the same shape as protean's ``ValidationError``.
    """

    def __init__(self, messages: dict[str, list[str]]):
        self.messages = messages
        super().__init__(messages)
