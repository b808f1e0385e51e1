import pytest

from rep_coach import classifier
from rep_coach.classifier import (
    classify_plank,
    classify_pushup,
    classify_squat,
    get_squat_profile,
)
from rep_coach.errors import InvalidSquatProfile
from rep_coach.landmarks import HIP, KNEE, ELBOW, SHOULDER


class TestSquat:
    def test_proper_squat(self, squat_frame):
        v = classify_squat(squat_frame(100))
        assert v.primary_angle == pytest.approx(100)
        assert v.secondary_angle == pytest.approx(180)
        assert v.in_position and v.form_ok

    @pytest.mark.parametrize("knee", [60, 130, 170])
    def test_outside_band(self, squat_frame, knee):
        v = classify_squat(squat_frame(knee))
        assert not v.in_position
        assert not v.form_ok

    def test_leaning_back_fails(self, squat_frame):
        v = classify_squat(squat_frame(100, back_straight=False))
        assert v.secondary_angle < 150
        assert not v.in_position

    def test_simple_profile_has_no_back_check(self, squat_frame):
        v = classify_squat(squat_frame(70, back_straight=False), profile="simple")
        assert v.in_position
        assert v.secondary_angle is None
        # 100 is in the band profile but not below the simple cutoff
        assert not classify_squat(squat_frame(100), profile="simple").in_position

    def test_unknown_profile(self):
        with pytest.raises(InvalidSquatProfile):
            get_squat_profile("deep")

    def test_coincident_knee_is_indeterminate(self, squat_frame):
        frame = squat_frame(100)
        frame[KNEE] = frame[HIP]
        v = classify_squat(frame)
        assert v.indeterminate
        assert v.primary_angle is None
        assert not v.in_position and not v.form_ok


class TestPushUp:
    def test_down(self, pushup_frame):
        v = classify_pushup(pushup_frame(70))
        assert v.primary_angle == pytest.approx(70)
        assert v.in_position and v.form_ok

    def test_up(self, pushup_frame):
        assert not classify_pushup(pushup_frame(170)).in_position

    def test_bent_elbow_lying_flat_is_not_down(self, pushup_frame):
        assert not classify_pushup(pushup_frame(70, chest_dropped=False)).in_position

    def test_indeterminate(self, pushup_frame):
        frame = pushup_frame(70)
        frame[ELBOW] = frame[SHOULDER]
        v = classify_pushup(frame)
        assert v.indeterminate and not v.in_position


class TestPlank:
    def test_aligned(self, plank_frame):
        v = classify_plank(plank_frame())
        assert v.primary_angle == pytest.approx(180)
        assert v.form_ok
        assert not v.in_position

    def test_shoulder_above_hip_is_not_a_plank(self, plank_frame):
        frame = plank_frame(shoulder=(0.3, 0.45), hip=(0.5, 0.5), ankle=(0.7, 0.55))
        v = classify_plank(frame)
        assert 160 < v.primary_angle < 190
        assert not v.form_ok

    def test_shoulder_below_hip_is_fine(self, plank_frame):
        frame = plank_frame(shoulder=(0.3, 0.55), hip=(0.5, 0.5), ankle=(0.7, 0.45))
        assert classify_plank(frame).form_ok

    def test_standing(self, plank_frame):
        frame = plank_frame(shoulder=(0.5, 0.2), hip=(0.5, 0.5), ankle=(0.5, 0.8))
        assert not classify_plank(frame).form_ok

    def test_sagging_hips(self, plank_frame):
        frame = plank_frame(shoulder=(0.3, 0.5), hip=(0.5, 0.65), ankle=(0.7, 0.5))
        assert not classify_plank(frame).form_ok


@pytest.fixture
def pin_angle(monkeypatch):
    """Force every joint angle to an exact value so threshold edges are testable."""
    def _pin(value):
        monkeypatch.setattr(classifier, "angle_at_vertex", lambda a, b, c: value)
    return _pin


class TestThresholdEdges:
    @pytest.mark.parametrize("knee, expected", [
        (79.999, False), (80.0, True), (120.0, True), (120.001, False),
    ])
    def test_squat_band_is_inclusive(self, squat_frame, pin_angle, knee, expected):
        pin_angle(knee)
        assert classify_squat(squat_frame(100)).in_position is expected

    @pytest.mark.parametrize("knee, expected", [(89.999, True), (90.0, False)])
    def test_simple_squat_cutoff_is_strict(self, squat_frame, pin_angle, knee, expected):
        pin_angle(knee)
        assert classify_squat(squat_frame(100), profile="simple").in_position is expected

    @pytest.mark.parametrize("elbow, expected", [(89.999, True), (90.0, False)])
    def test_pushup_elbow_is_strict(self, pushup_frame, pin_angle, elbow, expected):
        pin_angle(elbow)
        assert classify_pushup(pushup_frame(70)).in_position is expected

    @pytest.mark.parametrize("shoulder_y, expected", [(0.1, False), (0.125, True)])
    def test_pushup_shoulder_drop_is_strict(self, make_frame, pin_angle, shoulder_y, expected):
        pin_angle(70.0)
        # hip at y=0 keeps the difference exact in binary floating point
        frame = make_frame({SHOULDER: (0.4, shoulder_y), HIP: (0.7, 0.0)})
        assert classify_pushup(frame).in_position is expected

    @pytest.mark.parametrize("angle, expected", [
        (160.0, False), (160.001, True), (189.999, True), (190.0, False),
    ])
    def test_plank_angle_band_is_exclusive(self, plank_frame, pin_angle, angle, expected):
        pin_angle(angle)
        assert classify_plank(plank_frame()).form_ok is expected

    @pytest.mark.parametrize("shoulder_y, expected", [(0.1, False), (0.0625, True)])
    def test_plank_shoulder_hip_tolerance_is_strict(self, plank_frame, pin_angle, shoulder_y, expected):
        pin_angle(180.0)
        frame = plank_frame(shoulder=(0.3, shoulder_y), hip=(0.5, 0.0), ankle=(0.7, 0.0))
        assert classify_plank(frame).form_ok is expected

    @pytest.mark.parametrize("ankle_y, expected", [(0.1, False), (0.0625, True)])
    def test_plank_hip_ankle_tolerance_is_strict(self, plank_frame, pin_angle, ankle_y, expected):
        pin_angle(180.0)
        frame = plank_frame(shoulder=(0.3, 0.0), hip=(0.5, 0.0), ankle=(0.7, ankle_y))
        assert classify_plank(frame).form_ok is expected
