import pytest
from pydantic import ValidationError

from pr_reviewer.llm.schemas import ReviewFinding, ReviewResponse


class TestReviewFinding:
    def test_from_model_json(self):
        finding = ReviewFinding.model_validate({"lineNumber": "12", "reviewComment": "баг"})
        assert finding.line_number == "12"
        assert finding.review_comment == "баг"
        assert finding.line == 12

    def test_numeric_line_number(self):
        finding = ReviewFinding.model_validate({"lineNumber": 7, "reviewComment": "x"})
        assert finding.line_number == "7"
        assert finding.line == 7

    @pytest.mark.parametrize("raw,expected", [(" 8 ", 8), ("8.0", 8), ("abc", None), ("1.5", None), ("", None)])
    def test_line_coercion(self, raw, expected):
        finding = ReviewFinding(line_number=raw, review_comment="x")
        assert finding.line == expected

    def test_missing_comment(self):
        with pytest.raises(ValidationError):
            ReviewFinding.model_validate({"lineNumber": "1"})


class TestReviewResponse:
    def test_empty_reviews(self):
        response = ReviewResponse.model_validate_json('{"reviews": []}')
        assert response.reviews == []

    def test_order_preserved(self):
        response = ReviewResponse.model_validate_json(
            '{"reviews": [{"lineNumber": "3", "reviewComment": "a"},'
            ' {"lineNumber": "1", "reviewComment": "b"}]}'
        )
        assert [f.review_comment for f in response.reviews] == ["a", "b"]

    def test_missing_reviews_key(self):
        with pytest.raises(ValidationError):
            ReviewResponse.model_validate_json("{}")

    def test_not_json(self):
        with pytest.raises(ValidationError):
            ReviewResponse.model_validate_json("Looks good to me!")
