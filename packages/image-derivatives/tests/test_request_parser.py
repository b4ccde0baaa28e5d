import pytest
from image_derivatives import (
    DerivativeRequestParser,
    DerivativeSpecification,
    InvalidDimensions,
    InvalidQuality,
    OriginalNotFound,
)


class FakeOriginals:
    def __init__(self, names):
        self.names = set(names)
        self.lookups = []

    def exists(self, storage_name: str) -> bool:
        self.lookups.append(storage_name)
        return storage_name in self.names


@pytest.fixture
def originals():
    return FakeOriginals({"17123456789-482910234.jpg"})


@pytest.fixture
def parser(originals):
    return DerivativeRequestParser(originals)


class TestParseDimensions:
    @pytest.mark.parametrize(
        "token,expected",
        [
            ("150", (150, 150)),
            ("1", (1, 1)),
            ("500x500", (500, 500)),
            ("500X500", (500, 500)),
            ("800x600", (800, 600)),
            ("1X2", (1, 2)),
            ("007", (7, 7)),
            ("2147483647", (2147483647, 2147483647)),
        ],
    )
    def test_valid_tokens(self, token, expected):
        assert DerivativeRequestParser.parse_dimensions(token) == expected

    @pytest.mark.parametrize(
        "token",
        [
            "",
            "0",
            "-5",
            "5xY",
            "x500",
            "500x",
            "0x100",
            "100x0",
            "10x10x10",
            "abc",
            " 150",
            "150 ",
            "150\n",
            "1.5",
            "+150",
            "150*150",
            "2147483648",
            "99999999999999999999999",
        ],
    )
    def test_invalid_tokens(self, token):
        with pytest.raises(InvalidDimensions):
            DerivativeRequestParser.parse_dimensions(token)

    def test_none_token(self):
        with pytest.raises(InvalidDimensions, match="required"):
            DerivativeRequestParser.parse_dimensions(None)


class TestParseQuality:
    @pytest.mark.parametrize(
        "token,expected",
        [("1", 1), ("50", 50), ("100", 100), ("+75", 75), ("050", 50)],
    )
    def test_valid_tokens(self, token, expected):
        assert DerivativeRequestParser.parse_quality(token) == expected

    @pytest.mark.parametrize(
        "token",
        ["0", "101", "-1", "abc", "", "50.5", "50abc", " 50", "9" * 5000],
    )
    def test_invalid_tokens(self, token):
        with pytest.raises(InvalidQuality, match="between 1 and 100"):
            DerivativeRequestParser.parse_quality(token)


class TestParse:
    def test_returns_specification(self, parser):
        spec = parser.parse("500x300", "50", "17123456789-482910234.jpg")

        assert spec == DerivativeSpecification(
            width=500,
            height=300,
            quality=50,
            source_name="17123456789-482910234.jpg",
        )
        assert spec.size == (500, 300)
        assert spec.pixel_count == 150000

    def test_missing_original(self, parser):
        with pytest.raises(OriginalNotFound):
            parser.parse("500X500", "50", "missing.jpg")

    def test_invalid_quality_skips_existence_check(self, parser, originals):
        with pytest.raises(InvalidQuality):
            parser.parse("500", "0", "17123456789-482910234.jpg")

        assert originals.lookups == []

    def test_dimensions_are_checked_before_quality(self, parser):
        with pytest.raises(InvalidDimensions):
            parser.parse("0", "abc", "17123456789-482910234.jpg")

    def test_invalid_dimensions_win_over_missing_original(self, parser):
        with pytest.raises(InvalidDimensions):
            parser.parse("5xY", "50", "missing.jpg")
