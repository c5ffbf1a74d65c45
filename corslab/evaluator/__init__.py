"""Deterministic evaluator of the Fetch standard's CORS protocol."""

from .classifiers import (
    compute_needs_preflight,
    is_origin_allowed,
    is_simple_content_type,
    is_simple_header_name,
)
from .models import ActualResult, Outcome, PreflightResult, RequestDescriptor, ServerPolicy
from .normalizers import normalize_header_list, split_allow_origins
from .outcome import compute_cors_outcome
from .preflight import compute_preflight_allowed
from .scenarios import Scenario, ScenarioNotFoundError, get_scenario, list_scenarios
