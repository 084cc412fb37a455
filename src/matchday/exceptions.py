"""Exceptions for use in Matchday"""

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


# ========== Base Application Exception ==========


class MatchdayException(Exception):
    """Base exception for all Matchday errors.

    All custom exceptions in the application should inherit from this class.
    This enables catching all application-specific errors with a single except clause.
    """

    pass


# ========== Tournament Exceptions ==========


class TournamentException(MatchdayException):
    """Base exception for tournament-related errors."""

    pass


class TournamentNotFoundException(TournamentException):
    """Raised when a tournament id or name matches nothing."""

    pass


class InvalidTournamentFormatException(TournamentException):
    """Raised when a tournament format is not one of the supported formats."""

    pass


# ========== Participant Exceptions ==========


class ParticipantException(MatchdayException):
    """Base exception for participant-related errors."""

    pass


class ParticipantNotFoundException(ParticipantException):
    """Raised when a participant id or name is not on the roster."""

    pass


# ========== File/Resource Exceptions ==========


class ResourceException(MatchdayException):
    """Base exception for resource-related errors."""

    pass


class FileLoadException(ResourceException):
    """Raised when a file cannot be loaded."""

    pass


class FileSaveException(ResourceException):
    """Raised when a file cannot be saved."""

    pass


# ========== Validation Exceptions ==========


class ValidationException(MatchdayException):
    """Base exception for validation errors."""

    pass


class RatingValidationException(ValidationException):
    """Raised when a rating value is invalid."""

    pass


class TransferValidationException(ValidationException):
    """Raised when an imported transfer file has the wrong shape."""

    pass
