import pytest
import pydantic

from quotebox.errors import FormatError, ValidationError
from quotebox.models import NO_TEXT, UNCATEGORIZED, Quote, RemoteItem


def test_create_trims_fields() -> None:
    quote = Quote.create("  Stay hungry.  ", " Life ")
    assert quote.text == "Stay hungry."
    assert quote.category == "Life"


@pytest.mark.parametrize(("text", "category"), [("", "Life"), ("X", "   "), ("  ", "")])
def test_create_rejects_blank_fields(text: str, category: str) -> None:
    with pytest.raises(ValidationError):
        Quote.create(text, category)


def test_validation_error_is_value_error() -> None:
    with pytest.raises(ValueError):
        Quote.create("", "")


def test_quotes_are_immutable() -> None:
    quote = Quote.create("X", "Life")
    with pytest.raises(pydantic.ValidationError):
        quote.text = "Y"  # type: ignore[misc]


def test_identity_is_exact_and_case_sensitive() -> None:
    assert Quote.create("X", "Life") == Quote.create("X", "Life")
    assert Quote.create("X", "Life").key != Quote.create("x", "Life").key
    assert Quote.create("X", "Life").key != Quote.create("X", "life").key


def test_from_json_rejects_bad_shapes() -> None:
    with pytest.raises(FormatError):
        Quote.from_json(["X", "Life"])
    with pytest.raises(FormatError):
        Quote.from_json({"text": "X"})
    with pytest.raises(FormatError):
        Quote.from_json({"text": "", "category": "Life"})


def test_from_json_ignores_extra_fields() -> None:
    quote = Quote.from_json({"text": "X", "category": "Life", "author": "me"})
    assert quote.to_json() == {"text": "X", "category": "Life"}


def test_remote_item_maps_title_and_body() -> None:
    item = RemoteItem.model_validate({"userId": 1, "id": 7, "title": "X", "body": "Life"})
    assert item.to_quote() == Quote(text="X", category="Life")


@pytest.mark.parametrize("payload", [{}, {"title": "", "body": "  "}, {"title": 3, "body": None}])
def test_remote_item_fallbacks(payload: dict) -> None:
    quote = RemoteItem.model_validate(payload).to_quote()
    assert quote.text == NO_TEXT
    assert quote.category == UNCATEGORIZED
