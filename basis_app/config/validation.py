"""Configuration validation utilities."""

from dataclasses import dataclass
from typing import Any

from ..pricing.converter import ConversionPolicy

VALID_POLICIES = tuple(policy.value for policy in ConversionPolicy)


@dataclass(frozen=True)
class ValidationError:
    """Represents a configuration validation error."""
    field: str
    message: str
    value: Any


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


class ConfigValidator:
    """Validates configuration parameters."""

    @staticmethod
    def validate_carry_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate carry fallback parameters."""
        errors = []

        # Validate risk_free_rate
        if "risk_free_rate" in params:
            value = params["risk_free_rate"]
            if not _is_number(value) or value < 0 or value > 100:
                errors.append(ValidationError(
                    field="risk_free_rate",
                    message="Must be a percentage between 0 and 100",
                    value=value
                ))

        # Validate dividend yields
        for name in ("ndx_div_yield", "spx_div_yield"):
            if name in params:
                value = params[name]
                if not _is_number(value) or value < 0 or value > 100:
                    errors.append(ValidationError(
                        field=name,
                        message="Must be a percentage between 0 and 100",
                        value=value
                    ))

        return errors

    @staticmethod
    def validate_converter_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate converter parameters."""
        errors = []

        if "policy" in params and (
            not isinstance(params["policy"], str)
            or ConversionPolicy.normalize_name(params["policy"]) not in VALID_POLICIES
        ):
            errors.append(ValidationError(
                field="policy",
                message=f"Must be one of {', '.join(VALID_POLICIES)}",
                value=params["policy"]
            ))

        if "variance_points" in params:
            value = params["variance_points"]
            if not _is_number(value) or value < 0:
                errors.append(ValidationError(
                    field="variance_points",
                    message="Must be a non-negative number",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_order_flow_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate order flow parameters."""
        errors = []

        # Window lengths
        for name in ("vwap_lookback", "recent_delta_window", "ofi_window",
                     "block_window", "block_min_bars", "daily_window",
                     "weekly_window", "monthly_window"):
            if name in params:
                value = params[name]
                if not isinstance(value, int) or isinstance(value, bool) or value <= 0:
                    errors.append(ValidationError(
                        field=name,
                        message="Must be a positive integer",
                        value=value
                    ))

        # Validate profile_bins
        if "profile_bins" in params:
            value = params["profile_bins"]
            if not isinstance(value, int) or isinstance(value, bool) or value < 1:
                errors.append(ValidationError(
                    field="profile_bins",
                    message="Must be an integer of at least 1",
                    value=value
                ))

        # Validate value_area_pct
        if "value_area_pct" in params:
            value = params["value_area_pct"]
            if not _is_number(value) or value <= 0 or value > 1:
                errors.append(ValidationError(
                    field="value_area_pct",
                    message="Must be a positive number between 0 and 1",
                    value=value
                ))

        # Validate thresholds
        for name in ("ofi_threshold", "block_z_threshold", "vwap_fallback_band"):
            if name in params:
                value = params[name]
                if not _is_number(value) or value < 0:
                    errors.append(ValidationError(
                        field=name,
                        message="Must be a non-negative number",
                        value=value
                    ))

        return errors

    @staticmethod
    def validate_config(config: dict[str, Any]) -> list[ValidationError]:
        """Validate complete configuration."""
        errors = []

        if "carry" in config:
            errors.extend(ConfigValidator.validate_carry_params(config["carry"]))

        if "converter" in config:
            errors.extend(ConfigValidator.validate_converter_params(config["converter"]))

        if "order_flow" in config:
            errors.extend(ConfigValidator.validate_order_flow_params(config["order_flow"]))

        return errors
