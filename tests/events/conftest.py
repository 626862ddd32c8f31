import pytest
from factories import FakeCategorySource, FakeEventStore, make_user

from event_admin.events import EventAdminController, StaticAuthProvider
from event_admin.models import CategoryPublic


@pytest.fixture
def event_store():
    return FakeEventStore()


@pytest.fixture
def category_source():
    return FakeCategorySource(
        [
            CategoryPublic(id="c1", name="Shows", page_type="events"),
            CategoryPublic(id="c2", name="Receitas", page_type="blog"),
        ]
    )


@pytest.fixture
def actor():
    return make_user(7)


@pytest.fixture
def controller(event_store, category_source, actor):
    return EventAdminController(
        events=event_store,
        categories=category_source,
        auth=StaticAuthProvider(actor),
    )
