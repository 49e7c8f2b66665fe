"""hireagent - multi-agent candidate scoring for the employee onboarding intake.

The submission workflow calls `hireagent.orchestration.scoring_pipeline.ScoringPipeline`;
everything else in the package supports that one call.
"""

from __future__ import annotations

__version__ = "0.1.0"

__all__ = ["__version__"]
