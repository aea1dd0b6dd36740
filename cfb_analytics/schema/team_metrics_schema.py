#!/usr/bin/env python3
"""
Team Metric and Leaderboard Schema Definitions

Defines the shape of a season's per-team metric population and of the
composite leaderboard produced from it, using Pandera for validation.
"""

import logging
from typing import Optional

import pandera as pa
from pandera.typing import Series, DataFrame

logger = logging.getLogger(__name__)


class TeamMetricSchema(pa.DataFrameModel):
    """
    Pandera schema for one season's per-team metric population.

    Fields:
    - team: unique team identifier
    - offense_value: offensive EPA per play (higher is better, nullable)
    - defense_value: defensive EPA allowed per play (lower is better, nullable)
    - special_teams_value: special-teams efficiency rating (nullable)
    - strength_of_schedule_rank: externally supplied rank, 1 = hardest (nullable)
    - conference: conference name (optional column)
    - wins / losses: season record (optional columns)
    """

    team: Series[str] = pa.Field(
        description="Team identifier",
        unique=True,
        nullable=False
    )

    offense_value: Series[float] = pa.Field(
        description="Offensive efficiency",
        nullable=True
    )

    defense_value: Series[float] = pa.Field(
        description="Defensive efficiency allowed",
        nullable=True
    )

    special_teams_value: Series[float] = pa.Field(
        description="Special-teams efficiency",
        nullable=True
    )

    strength_of_schedule_rank: Optional[Series[float]] = pa.Field(
        description="Strength of schedule rank (1 = hardest)",
        nullable=True,
        ge=1
    )

    conference: Optional[Series[str]] = pa.Field(
        description="Conference name",
        nullable=True
    )

    wins: Optional[Series[float]] = pa.Field(nullable=True, ge=0)
    losses: Optional[Series[float]] = pa.Field(nullable=True, ge=0)

    class Config:
        """Pandera configuration."""
        coerce = True
        strict = False


class RankedTeamSchema(pa.DataFrameModel):
    """
    Pandera schema for the composite leaderboard.

    Enforces dense 1..N ranks and bounded component percentiles.
    """

    rank: Series[int] = pa.Field(
        description="Dense rank, 1 = best",
        ge=1,
        unique=True
    )

    team: Series[str] = pa.Field(
        description="Team identifier",
        unique=True
    )

    composite_score: Series[float] = pa.Field(
        description="Weighted sum of component percentiles"
    )

    offense_percentile: Series[float] = pa.Field(ge=0, le=100)
    defense_percentile: Series[float] = pa.Field(ge=0, le=100)
    special_teams_percentile: Series[float] = pa.Field(ge=0, le=100)

    class Config:
        """Pandera configuration."""
        coerce = True
        strict = False

    @pa.dataframe_check
    def ranks_are_dense(cls, df: DataFrame) -> bool:
        """Ranks must be exactly 1..N."""
        return sorted(df["rank"].tolist()) == list(range(1, len(df) + 1))


def validate_dataframe(df, schema=TeamMetricSchema):
    """
    Validate a DataFrame against a schema.

    Args:
        df: pandas DataFrame to validate
        schema: Pandera schema class (default: TeamMetricSchema)

    Returns:
        Validated DataFrame

    Raises:
        pa.errors.SchemaError: If validation fails
    """
    try:
        return schema.validate(df)
    except (pa.errors.SchemaError, pa.errors.SchemaErrors) as e:
        logger.error(f"{schema.__name__} validation failed: {e}")
        logger.error(f"DataFrame shape: {df.shape}, columns: {list(df.columns)}")

        if getattr(e, 'failure_cases', None) is not None:
            logger.error(f"Failure cases:\n{e.failure_cases}")

        raise
