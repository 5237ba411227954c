import pytest

from runner_configs.core import (
    Success, Failure, BackendUnreachable,
    LiveParameters, ModelSource, ModelCatalog,
    MemoryStore, STATE_KEY, ConfigurationCollection, EditSession,
)


class RecordingNotifier:
    """Collects notifications instead of printing them."""

    def __init__(self):
        self.messages: list[tuple[str, str]] = []

    def success(self, message: str) -> None:
        self.messages.append(("success", message))

    def warning(self, message: str) -> None:
        self.messages.append(("warning", message))

    def error(self, message: str) -> None:
        self.messages.append(("error", message))


class FakeBackend:
    """Records pushes; optionally fails like an unreachable server."""

    def __init__(self, notifier=None, store=None, fail: bool = False):
        self.notifier = notifier
        self.store = store
        self.fail = fail
        self.pushes: list[tuple[LiveParameters, int]] = []
        # store contents observed when each push was issued
        self.store_snapshots: list[str | None] = []
        self.closed = False

    def push_live_parameters(self, params: LiveParameters, port: int):
        self.pushes.append((params, port))
        if self.store is not None:
            self.store_snapshots.append(self.store.read(STATE_KEY))
        if self.fail:
            error = BackendUnreachable(url=f"http://127.0.0.1:{port}/update-config", reason="refused")
            if self.notifier is not None:
                self.notifier.error("Backend unreachable: refused")
            return Failure(error)
        return Success(None)

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def backend(notifier, store):
    return FakeBackend(notifier=notifier, store=store)


@pytest.fixture
def catalog():
    return ModelCatalog([
        ModelSource(name="foo", is_complete=True, custom_tokenizer="vocab.txt"),
        ModelSource(name="bar", is_complete=True),
        ModelSource(name="partial", is_complete=False),
    ])


@pytest.fixture
def collection(store):
    return ConfigurationCollection.load(store)


@pytest.fixture
def session(collection, catalog, backend, notifier):
    return EditSession(collection, catalog, backend, notifier)
