import pytest

from schemas import DEFAULT_RATE, validate_movie, validate_partial_movie


def fields(result):
    return [item["field"] for item in result.error]


def test_validate_movie_accepts_full_payload(inception):
    result = validate_movie(inception)
    assert result.success
    assert result.error is None
    assert result.data == inception


def test_validate_movie_applies_default_rate(inception):
    del inception["rate"]
    result = validate_movie(inception)
    assert result.success
    assert result.data["rate"] == DEFAULT_RATE


def test_validate_movie_reports_missing_title(inception):
    del inception["title"]
    result = validate_movie(inception)
    assert not result.success
    assert result.data is None
    assert fields(result) == ["title"]
    assert result.error[0]["type"] == "missing"
    assert result.error[0]["path"] == ["title"]
    assert result.error[0]["message"]


def test_validate_movie_lists_every_violation(inception):
    inception.update(year="2010", duration=0, rate=11, poster="not a url")
    result = validate_movie(inception)
    assert not result.success
    assert sorted(fields(result)) == ["duration", "poster", "rate", "year"]


def test_validate_movie_rejects_year_out_of_range(inception):
    inception["year"] = 1850
    result = validate_movie(inception)
    assert fields(result) == ["year"]


def test_validate_movie_rejects_empty_and_unknown_genre(inception):
    inception["genre"] = []
    assert fields(validate_movie(inception)) == ["genre"]

    inception["genre"] = ["Western-ish"]
    assert fields(validate_movie(inception)) == ["genre.0"]


def test_validate_movie_drops_unknown_fields(inception):
    inception["id"] = "chosen-by-client"
    inception["studio"] = "Legendary"
    result = validate_movie(inception)
    assert result.success
    assert "id" not in result.data
    assert "studio" not in result.data


def test_validate_movie_rejects_non_object():
    result = validate_movie(["Inception"])
    assert not result.success
    assert fields(result) == [""]

    assert not validate_movie(None).success


def test_validate_partial_accepts_empty_payload():
    result = validate_partial_movie({})
    assert result.success
    assert result.data == {}


def test_validate_partial_keeps_only_sent_fields():
    result = validate_partial_movie({"year": 1999})
    assert result.success
    assert result.data == {"year": 1999}


def test_validate_partial_checks_sent_fields():
    result = validate_partial_movie({"year": "soon", "title": "Ok"})
    assert not result.success
    assert fields(result) == ["year"]


def test_validate_partial_rejects_null():
    result = validate_partial_movie({"title": None})
    assert not result.success
    assert fields(result) == ["title"]


@pytest.mark.parametrize("rate", ["9", True])
def test_validate_movie_rejects_non_numeric_rate(inception, rate):
    inception["rate"] = rate
    result = validate_movie(inception)
    assert not result.success
    assert fields(result) == ["rate"]


def test_validate_movie_accepts_integer_rate(inception):
    inception["rate"] = 9
    result = validate_movie(inception)
    assert result.success
    assert result.data["rate"] == 9


@pytest.mark.parametrize("rate", ["9", True])
def test_validate_partial_rejects_non_numeric_rate(rate):
    result = validate_partial_movie({"rate": rate})
    assert not result.success
    assert fields(result) == ["rate"]
