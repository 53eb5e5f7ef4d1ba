from pydantic import BaseModel, ConfigDict, Field


class ReviewFinding(BaseModel):
    """Замечание модели к строке diff."""

    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True)

    line_number: str = Field(alias="lineNumber")
    review_comment: str = Field(alias="reviewComment")

    @property
    def line(self) -> int | None:
        """Номер строки как int или None, если модель вернула не число."""
        try:
            value = float(self.line_number.strip())
        except ValueError:
            return None
        if not value.is_integer():
            return None
        return int(value)


class ReviewResponse(BaseModel):
    """Ответ модели на ревью одного файла."""

    reviews: list[ReviewFinding]
