class APIError(Exception):
    """Raised when a request to the dataset API fails.

    ``status_code`` is ``None`` for timeouts, transport failures and bodies
    that cannot be decoded. ``retriable`` is true for those and for 5xx
    responses.
    """

    def __init__(self, status_code: int | None, detail: str, *, retriable: bool = False) -> None:
        self.status_code = status_code
        self.detail = detail
        self.retriable = retriable
        prefix = f"[{status_code}]" if status_code is not None else "[network]"
        super().__init__(f"{prefix} {detail}")
