from pydantic import BaseModel, Field, ValidationError, model_validator


class AnalyticsSettings(BaseModel):
    weight_increment: float = Field(default=5.0, gt=0)
    min_reps: int = Field(default=3, ge=1)
    max_reps: int = Field(default=20, ge=1)
    suggestion_window_months: int = Field(default=3, ge=0)
    facts_window_days: int = Field(default=30, ge=0)
    filter_limit: int = Field(default=200, ge=1)
    fuzzy_cutoff: float = Field(default=0.7, gt=0, le=1)
    bigram_cutoff: float = Field(default=0.5, gt=0, le=1)
    recent_pr_limit: int = Field(default=20, ge=1)

    @model_validator(mode="after")
    def _rep_range(self) -> "AnalyticsSettings":
        if self.min_reps > self.max_reps:
            raise ValueError("min_reps must not exceed max_reps")
        return self


def validate_settings(data: dict) -> AnalyticsSettings:
    try:
        return AnalyticsSettings(**data)
    except ValidationError as e:
        raise ValueError(str(e))
