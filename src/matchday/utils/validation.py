"""Validation utilities for Matchday.

This module provides reusable validation functions with consistent error handling.
"""

# Matchday
# Copyright (C) 2025  Matchday developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

from typing import Any, Iterable, List, Optional

from dateutil import parser as date_parser

from matchday.constants import (
    BYE_ID,
    DEFAULT_RATING,
    ID_PREFIX_PARTICIPANT,
    RATING_MAX,
    RATING_MIN,
)
from matchday.exceptions import (
    RatingValidationException,
    TransferValidationException,
)
from matchday.models.tournament import Participant
from matchday.utils import generate_id


class ValidationResult:
    """Result of a validation operation.

    Attributes:
        is_valid: Whether the validation passed
        error_message: Human-readable error message if invalid
        sanitized_value: Cleaned/normalized value if valid
    """

    def __init__(
        self,
        is_valid: bool,
        error_message: Optional[str] = None,
        sanitized_value: Any = None,
    ):
        self.is_valid = is_valid
        self.error_message = error_message
        self.sanitized_value = sanitized_value

    def __bool__(self) -> bool:
        """Allow using result in boolean context: if result: ..."""
        return self.is_valid

    def __repr__(self) -> str:
        if self.is_valid:
            return f"ValidationResult(VALID, {self.sanitized_value!r})"
        return f"ValidationResult(INVALID, {self.error_message!r})"


# ========== Rating Validation ==========


def clamp_rating(rating: float) -> float:
    """Clamp a rating into the supported range."""
    return max(RATING_MIN, min(RATING_MAX, rating))


def validate_rating(rating: Any) -> ValidationResult:
    """Validate a participant rating.

    Out-of-range numbers are accepted and clamped; only non-numbers fail.

    Args:
        rating: Rating value to validate

    Returns:
        ValidationResult whose sanitized value is the clamped rating
    """
    if rating is None:
        return ValidationResult(is_valid=True, sanitized_value=DEFAULT_RATING)

    if isinstance(rating, bool):
        return ValidationResult(
            is_valid=False,
            error_message=f"Rating must be a number: {rating}",
        )
    try:
        rating_value = float(rating)
    except (ValueError, TypeError):
        return ValidationResult(
            is_valid=False,
            error_message=f"Rating must be a number: {rating}",
        )

    if rating_value != rating_value:
        return ValidationResult(is_valid=False, error_message="Rating must not be NaN")

    if rating_value.is_integer():
        rating_value = int(rating_value)
    return ValidationResult(is_valid=True, sanitized_value=clamp_rating(rating_value))


def validate_rating_strict(rating: Any) -> float:
    """Validate rating and return the clamped value or raise exception.

    Raises:
        RatingValidationException: If rating is not a number
    """
    result = validate_rating(rating)
    if not result.is_valid:
        raise RatingValidationException(result.error_message)
    return result.sanitized_value


# ========== Roster Validation ==========


def validate_participants(participants: Iterable[Participant]) -> List[Participant]:
    """Clean a roster before it enters a tournament.

    Names are trimmed; empty names and case-insensitive duplicates are
    dropped (first occurrence wins). A missing or zero rating becomes the
    default rating and every rating is clamped. Missing ids, and the id
    reserved for byes, are replaced with generated ones.

    Args:
        participants: Roster as entered

    Returns:
        Cleaned roster in entry order
    """
    seen = set()
    cleaned: List[Participant] = []
    for participant in participants:
        participant_id = participant.id
        if not participant_id or participant_id == BYE_ID:
            participant_id = generate_id(ID_PREFIX_PARTICIPANT)
        name = participant.name.strip()
        key = name.lower()
        if not key or key in seen:
            continue
        seen.add(key)
        cleaned.append(
            Participant(
                id=participant_id,
                name=name,
                rating=clamp_rating(participant.rating or DEFAULT_RATING),
            )
        )
    return cleaned


# ========== Generic Validation ==========


def validate_positive_integer(
    value: Any, field_name: str = "Value"
) -> ValidationResult:
    """Validate that a value is a positive integer.

    Args:
        value: Value to validate
        field_name: Name of the field for error messages

    Returns:
        ValidationResult with validation status
    """
    if value is None:
        return ValidationResult(
            is_valid=False,
            error_message=f"{field_name} is required",
        )

    try:
        int_value = int(value)
    except (ValueError, TypeError):
        return ValidationResult(
            is_valid=False,
            error_message=f"{field_name} must be a number",
        )
    if int_value <= 0:
        return ValidationResult(
            is_valid=False,
            error_message=f"{field_name} must be positive",
        )
    return ValidationResult(is_valid=True, sanitized_value=int_value)


# ========== Transfer File Validation ==========


def validate_transfer_payload(payload: Any) -> ValidationResult:
    """Check the top-level shape of an imported transfer file.

    Args:
        payload: Decoded JSON document

    Returns:
        ValidationResult carrying the payload itself when valid
    """
    if not isinstance(payload, dict):
        return ValidationResult(
            is_valid=False, error_message="Transfer file must be a JSON object"
        )
    if not isinstance(payload.get("tournaments"), list):
        return ValidationResult(
            is_valid=False, error_message="tournaments must be a list"
        )
    if not isinstance(payload.get("participantHistory", {}), dict):
        return ValidationResult(
            is_valid=False, error_message="participantHistory must be an object"
        )
    current_id = payload.get("currentTournamentId")
    if current_id is not None and not isinstance(current_id, str):
        return ValidationResult(
            is_valid=False,
            error_message="currentTournamentId must be a string or null",
        )
    schema_version = payload.get("schemaVersion")
    if schema_version is not None and (
        isinstance(schema_version, bool) or not isinstance(schema_version, int)
    ):
        return ValidationResult(
            is_valid=False, error_message="schemaVersion must be an integer"
        )
    exported_at = payload.get("exportedAt")
    if exported_at is not None:
        if not isinstance(exported_at, str):
            return ValidationResult(
                is_valid=False, error_message="exportedAt must be a timestamp string"
            )
        try:
            date_parser.isoparse(exported_at)
        except ValueError:
            return ValidationResult(
                is_valid=False,
                error_message=f"exportedAt is not an ISO-8601 timestamp: {exported_at}",
            )
    return ValidationResult(is_valid=True, sanitized_value=payload)


def validate_transfer_payload_strict(payload: Any) -> dict:
    """Validate a transfer file and return it or raise exception.

    Raises:
        TransferValidationException: If the payload has the wrong shape
    """
    result = validate_transfer_payload(payload)
    if not result.is_valid:
        raise TransferValidationException(result.error_message)
    return result.sanitized_value
