from typing import (
    List,
    Optional,
)


class TviException(Exception):
    pass


class FetchException(TviException):
    def __init__(self, url: str, status: Optional[int] = None, reason: str = "") -> None:
        self._url = url
        self._status = status
        message = f"Failed to fetch {url}"
        if status is not None:
            message += f": {status}"
        if reason:
            message += f" ({reason})"
        super().__init__(message)

    @property
    def url(self) -> str:
        return self._url

    @property
    def status(self) -> Optional[int]:
        return self._status


class SeriesNotFoundException(TviException):
    def __init__(self, title: str) -> None:
        self._title = title
        super().__init__(f'no TV series found for "{title}"')

    @property
    def title(self) -> str:
        return self._title


class SpecSyntaxException(TviException):
    def __init__(self, argument: str) -> None:
        self._argument = argument
        super().__init__(f"invalid selection -- `{argument}'")

    @property
    def argument(self) -> str:
        return self._argument


class SpecRangeException(TviException):
    def __init__(self, messages: List[str]) -> None:
        self._messages = list(messages)
        super().__init__("; ".join(self._messages))

    @property
    def messages(self) -> List[str]:
        return self._messages
