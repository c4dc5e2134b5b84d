import pytest
from protean.integrations.pytest import DomainFixture


@pytest.fixture(scope="session")
def reviewhub_bed():
    from reviewhub.domain import reviewhub

    bed = DomainFixture(reviewhub)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(reviewhub_bed):
    with reviewhub_bed.domain_context():
        yield


@pytest.fixture(autouse=True)
def blob_store():
    """A fresh in-memory blob store for every test."""
    from reviewhub.uploads import reset_blob_store, set_blob_store
    from reviewhub.uploads.fake_adapter import InMemoryBlobStore

    store = InMemoryBlobStore()
    set_blob_store(store)
    yield store
    reset_blob_store()
