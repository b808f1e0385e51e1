# rep_coach/errors.py


class RepCoachError(Exception):
    """Base class for everything the core raises."""


class IndeterminateGeometry(RepCoachError):
    """A joint pair is coincident, so the requested angle is undefined."""


class MissingLandmarks(RepCoachError):
    """No usable pose in this frame (nothing detected or joints missing)."""


class InvalidExerciseKind(RepCoachError, ValueError):
    """Exercise selector that does not name a known exercise."""

    def __init__(self, selector):
        self.selector = selector
        super().__init__(f"Unknown exercise: {selector!r}")


class InvalidSquatProfile(RepCoachError, ValueError):
    """Squat threshold profile name that is not in SQUAT_PROFILES."""

    def __init__(self, name):
        self.name = name
        super().__init__(f"Unknown squat profile: {name!r}")
