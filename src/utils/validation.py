"""
Input validation for FF VBD Engine
"""
from typing import Dict, Optional, Union, Any
from pathlib import Path
import math
import re

from config import VALID_ROSTER_CONFIGS, SCORING_MULTIPLIERS


class ValidationError(Exception):
    """Custom exception for validation errors"""
    pass


class InputValidator:
    """Validates user inputs and configuration"""

    # Valid roster slot codes
    VALID_POSITIONS = {'QB', 'RB', 'WR', 'TE', 'K', 'DST', 'FLEX', 'SUPERFLEX', 'BENCH'}

    # Positions a player can have
    PLAYER_POSITIONS = {'QB', 'RB', 'WR', 'TE', 'K', 'DST'}

    # Roster size constraints
    MIN_ROSTER_SIZE = 1
    MAX_ROSTER_SIZE = 50

    # Team constraints
    MIN_TEAMS = 4
    MAX_TEAMS = 32

    # ADP constraints
    MIN_ADP = 1
    MAX_ADP = 500

    # Schedule rank scale
    MIN_SOS = 1
    MAX_SOS = 32

    @staticmethod
    def validate_roster_settings(roster_settings: Dict[str, int]) -> Dict[str, int]:
        """Validate roster configuration settings"""
        if not isinstance(roster_settings, dict):
            raise ValidationError("Roster settings must be a dictionary")

        validated = {}
        total_slots = 0

        for position, count in roster_settings.items():
            # Validate position
            pos = position.upper()
            if pos not in InputValidator.VALID_POSITIONS:
                raise ValidationError(f"Invalid position: {position}. Valid positions: {', '.join(sorted(InputValidator.VALID_POSITIONS))}")

            # Validate count
            if not isinstance(count, int) or isinstance(count, bool):
                raise ValidationError(f"Roster count for {position} must be an integer")

            if count < 0:
                raise ValidationError(f"Roster count for {position} cannot be negative")

            if count > 10:  # Reasonable limit per position
                raise ValidationError(f"Roster count for {position} seems too high: {count}")

            validated[pos] = count
            total_slots += count

        # Validate total roster size
        if total_slots < InputValidator.MIN_ROSTER_SIZE:
            raise ValidationError(f"Total roster size must be at least {InputValidator.MIN_ROSTER_SIZE}")

        if total_slots > InputValidator.MAX_ROSTER_SIZE:
            raise ValidationError(f"Total roster size cannot exceed {InputValidator.MAX_ROSTER_SIZE}")

        return validated

    @staticmethod
    def get_roster_type(roster: Dict[str, int]) -> str:
        """Name of the validated roster shape closest to this roster"""
        wr = roster.get("WR", 2)
        flex = roster.get("FLEX", 1)
        superflex = roster.get("SUPERFLEX", 0)

        if superflex > 0:
            return "superflex"
        if wr == 3 and flex == 2:
            return "3wr_2flex"
        if wr == 3:
            return "3wr_roster"
        if flex == 2:
            return "2flex_roster"
        return "standard_roster"

    @staticmethod
    def validate_roster_shape(roster: Dict[str, int]) -> str:
        """
        Check starters and flex against the supported roster shapes.

        Missing counts take the standard roster's values.

        Returns:
            The matching roster type name
        """
        config = {
            "QB": roster.get("QB", 1),
            "RB": roster.get("RB", 2),
            "WR": roster.get("WR", 2),
            "TE": roster.get("TE", 1),
            "FLEX": roster.get("FLEX", 1),
            "SUPERFLEX": roster.get("SUPERFLEX", 0),
        }

        for name, shape in VALID_ROSTER_CONFIGS.items():
            if shape == config:
                return name

        valid_options = ", ".join(
            f"{c['QB']}QB/{c['RB']}RB/{c['WR']}WR/{c['TE']}TE/{c['FLEX']}FLEX"
            + (f"/{c['SUPERFLEX']}SF" if c["SUPERFLEX"] else "")
            for c in VALID_ROSTER_CONFIGS.values()
        )
        raise ValidationError(f"Invalid roster configuration. Valid options: {valid_options}")

    @staticmethod
    def validate_scoring_system(scoring_system: str) -> str:
        """Validate and convert scoring system string"""
        if not scoring_system:
            raise ValidationError("Scoring system cannot be empty")

        valid_systems = list(SCORING_MULTIPLIERS.keys())
        scoring_upper = scoring_system.upper().replace("-", "_")

        if scoring_upper not in valid_systems:
            raise ValidationError(f"Invalid scoring system: {scoring_system}. Valid options: {', '.join(valid_systems)}")

        return scoring_upper

    @staticmethod
    def validate_team_count(teams: int) -> int:
        """Validate number of teams in league"""
        if not isinstance(teams, int) or isinstance(teams, bool):
            raise ValidationError("Number of teams must be an integer")

        if teams < InputValidator.MIN_TEAMS:
            raise ValidationError(f"Number of teams must be at least {InputValidator.MIN_TEAMS}")

        if teams > InputValidator.MAX_TEAMS:
            raise ValidationError(f"Number of teams cannot exceed {InputValidator.MAX_TEAMS}")

        return teams

    @staticmethod
    def validate_league_settings(settings: Dict[str, Any]) -> Dict[str, Any]:
        """Validate a settings dict (teams, scoring, roster)"""
        if not isinstance(settings, dict):
            raise ValidationError("League settings must be a dictionary")

        validated = dict(settings)
        if "teams" in settings:
            validated["teams"] = InputValidator.validate_team_count(settings["teams"])
        if "scoring" in settings:
            validated["scoring"] = InputValidator.validate_scoring_system(settings["scoring"])
        if "roster" in settings:
            validated["roster"] = InputValidator.validate_roster_settings(settings["roster"])
            InputValidator.validate_roster_shape(validated["roster"])

        return validated

    @staticmethod
    def validate_file_path(path: Union[str, Path], must_exist: bool = False) -> Path:
        """Validate file path"""
        try:
            path_obj = Path(path)
        except TypeError as e:
            raise ValidationError(f"Invalid file path: {e}")

        if must_exist and not path_obj.exists():
            raise ValidationError(f"Path does not exist: {path}")

        return path_obj

    @staticmethod
    def validate_player_name(name: str) -> str:
        """Validate and clean player name"""
        if not name or not isinstance(name, str):
            raise ValidationError("Player name must be a non-empty string")

        # Remove excessive whitespace
        cleaned = ' '.join(name.split())

        # Check for reasonable length
        if len(cleaned) < 2:
            raise ValidationError("Player name too short")

        if len(cleaned) > 100:
            raise ValidationError("Player name too long")

        # Check for valid characters (letters, spaces, hyphens, apostrophes, periods)
        if not re.match(r"^[a-zA-Z\s\-'\.]+$", cleaned):
            raise ValidationError(f"Player name contains invalid characters: {name}")

        return cleaned

    @staticmethod
    def validate_adp(adp: Union[int, float, str]) -> float:
        """Validate Average Draft Position"""
        try:
            adp_float = float(adp)
        except (TypeError, ValueError):
            raise ValidationError(f"ADP must be a number: {adp}")

        if not math.isfinite(adp_float):
            raise ValidationError(f"ADP must be finite: {adp}")

        if adp_float < InputValidator.MIN_ADP:
            raise ValidationError(f"ADP cannot be less than {InputValidator.MIN_ADP}")

        if adp_float > InputValidator.MAX_ADP:
            raise ValidationError(f"ADP cannot exceed {InputValidator.MAX_ADP}")

        return adp_float

    @staticmethod
    def validate_projection(points: Union[int, float, str, None]) -> Optional[float]:
        """Validate optional projected season points"""
        if points is None or points == '':
            return None

        try:
            points_float = float(points)
        except (TypeError, ValueError):
            raise ValidationError(f"Projected points must be a number: {points}")

        if not math.isfinite(points_float) or points_float < 0:
            raise ValidationError(f"Projected points must be a non-negative number: {points}")

        return points_float

    @staticmethod
    def validate_draft_pick(pick: int, total_teams: int) -> int:
        """Validate draft pick number"""
        if not isinstance(pick, int):
            raise ValidationError("Draft pick must be an integer")

        if pick < 1:
            raise ValidationError("Draft pick must be positive")

        # Reasonable limit for draft picks
        max_picks = total_teams * 30  # 30 rounds max
        if pick > max_picks:
            raise ValidationError(f"Draft pick {pick} exceeds reasonable limit for {total_teams} teams")

        return pick

    @staticmethod
    def validate_player_record(record: Dict[str, Any]) -> Dict[str, Any]:
        """Validate one player-pool row (name, position, adp, projection)"""
        if not isinstance(record, dict):
            raise ValidationError("Player record must be a dictionary")

        for field in ('name', 'position', 'adp'):
            if record.get(field) in (None, ''):
                raise ValidationError(f"Player record missing required field: {field}")

        validated = dict(record)
        validated['name'] = InputValidator.validate_player_name(record['name'])

        position = str(record['position']).strip().upper()
        if position in ('DEF', 'D/ST'):
            position = 'DST'
        if position not in InputValidator.PLAYER_POSITIONS:
            raise ValidationError(f"Invalid position for {validated['name']}: {record['position']}")
        validated['position'] = position

        validated['adp'] = InputValidator.validate_adp(record['adp'])
        validated['projected_points'] = InputValidator.validate_projection(record.get('projected_points'))

        return validated

    @staticmethod
    def validate_schedule(schedule: Dict[str, Any]) -> Dict[str, float]:
        """Validate a position -> SOS rank mapping on the 1-32 scale"""
        validated = {}
        for position, value in schedule.items():
            pos = str(position).upper()
            if pos not in InputValidator.PLAYER_POSITIONS:
                raise ValidationError(f"Invalid schedule position: {position}")

            try:
                sos = float(value)
            except (TypeError, ValueError):
                raise ValidationError(f"Schedule value for {position} must be a number: {value}")

            if not InputValidator.MIN_SOS <= sos <= InputValidator.MAX_SOS:
                raise ValidationError(
                    f"Schedule value for {position} must be between "
                    f"{InputValidator.MIN_SOS} and {InputValidator.MAX_SOS}: {value}"
                )
            validated[pos] = sos

        return validated
