import pytest

from streamcrush.services.source import StreamSource


class ListSource(StreamSource):
    """Replays a fixed list of values; running past the end is a test bug."""

    def __init__(self, values, index=0):
        self.values = list(values)
        self.index = index

    def next(self):
        value = self.values[self.index]
        self.index += 1
        return value

    def duplicate(self):
        return ListSource(self.values, self.index)


@pytest.fixture
def list_source():
    return ListSource
