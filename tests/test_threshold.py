"""
Threshold Extraction Tests
==========================

Tests for get_alt and the AltReport it produces.
"""

import numpy as np
import pytest

from loomer.errors import (
    InvalidInputError,
    MissingParameterError,
    OutOfRangeError,
    UnextractableError,
)
from loomer.kinematics import (
    angular_velocity_closed_form,
    angular_velocity_discrete,
    visual_angle,
)
from loomer.threshold import get_alt


class TestGetAlt:
    """Tests for ALT extraction from speed models."""
    
    def test_alt_is_closed_form(self, constant_model):
        report = get_alt(constant_model, response_frame=29)
        expected = angular_velocity_closed_form(500, 10, constant_model.series.distance[28])
        assert report.alt == pytest.approx(expected, abs=1e-6)
        assert report.response_frame_adjusted == 29
        assert report.latency_applied == 0.0
        assert report.new_distance_applied is None
    
    def test_alt_deg(self, constant_model):
        report = get_alt(constant_model, response_frame=20)
        assert report.alt_deg == pytest.approx(np.degrees(report.alt))
    
    def test_latency_shifts_frame(self, constant_model):
        report = get_alt(constant_model, response_frame=29, latency=0.2)
        expected = angular_velocity_closed_form(500, 10, constant_model.series.distance[22])
        
        assert report.response_frame == 29
        assert report.response_frame_adjusted == 23
        assert report.alt == pytest.approx(expected, abs=1e-6)
    
    def test_in_model_metrics(self, constant_model):
        report = get_alt(constant_model, response_frame=15)
        assert report.distance_in_model == constant_model.series.distance[14]
        assert report.speed_in_model == 500
    
    def test_perceived_matches_model(self, constant_model):
        """At the model's own viewing distance perception is veridical."""
        report = get_alt(constant_model, response_frame=15)
        assert report.distance_perceived == pytest.approx(report.distance_in_model, rel=1e-6)
        assert report.speed_perceived == pytest.approx(500, rel=1e-2)
    
    def test_new_distance_doubles_perceived_distance(self, constant_model):
        report = get_alt(constant_model, response_frame=20, new_distance=40)
        assert report.new_distance_applied == 40
        assert report.distance_perceived == pytest.approx(2 * report.distance_in_model, rel=1e-2)
    
    def test_new_distance_recomputes_angles(self, constant_model):
        report = get_alt(constant_model, response_frame=20, new_distance=40)
        alpha = visual_angle(constant_model.series.diam_on_screen, 40)
        dadt = angular_velocity_discrete(alpha, 30)
        
        assert report.adjusted_series.alpha == pytest.approx(alpha)
        assert report.alt == pytest.approx(dadt[19])
    
    def test_variable_speed(self, variable_model):
        report = get_alt(variable_model, response_frame=25, latency=0.1)
        
        assert report.response_frame_adjusted == 22
        assert report.alt == pytest.approx(variable_model.series.dadt[21])
        assert report.speed_in_model == pytest.approx(variable_model.speed_profile[21])
        assert report.distance_in_model == pytest.approx(variable_model.series.distance[21])
    
    def test_original_model_unchanged(self, constant_model):
        series = constant_model.series
        dadt = series.dadt.copy()
        report = get_alt(constant_model, response_frame=29, new_distance=40, latency=0.1)
        
        assert report.original_model is constant_model
        assert constant_model.series is series
        assert series.perceived_distance is None
        assert np.array_equal(series.dadt, dadt, equal_nan=True)
        assert report.adjusted_series is not series
    
    def test_adjusted_series_undefined_at_frame_one(self, constant_model):
        report = get_alt(constant_model, response_frame=10)
        adjusted = report.adjusted_series
        assert np.isnan(adjusted.dadt[0])
        assert np.isnan(adjusted.perceived_speed[0])
        assert adjusted.frame_at(1).perceived_speed is None


class TestGetAltDiameter:
    """Tests for ALT extraction from diameter models."""
    
    def test_requires_new_distance(self, diameter_model_small):
        with pytest.raises(MissingParameterError, match="new_distance"):
            get_alt(diameter_model_small, response_frame=10)
    
    def test_alt_is_discrete(self, diameter_model_small):
        report = get_alt(diameter_model_small, response_frame=10, new_distance=20)
        alpha = visual_angle(diameter_model_small.series.diam_on_screen, 20)
        expected = angular_velocity_discrete(alpha, 30)[9]
        assert report.alt == pytest.approx(expected)
    
    def test_no_perceived_metrics(self, diameter_model_small):
        report = get_alt(diameter_model_small, response_frame=10, new_distance=20)
        assert report.distance_perceived is None
        assert report.speed_perceived is None
        assert report.distance_in_model is None
        assert report.speed_in_model is None
        assert report.adjusted_series.perceived_distance is None


class TestGetAltErrors:
    """Tests for get_alt input validation."""
    
    def test_missing_response_frame(self, constant_model):
        with pytest.raises(MissingParameterError, match="response_frame"):
            get_alt(constant_model)
    
    def test_first_frame(self, constant_model):
        with pytest.raises(UnextractableError):
            get_alt(constant_model, response_frame=1)
    
    def test_beyond_last_frame(self, constant_model):
        with pytest.raises(OutOfRangeError):
            get_alt(constant_model, response_frame=31)
    
    @pytest.mark.parametrize("frame", [0, -3])
    def test_non_positive_frame(self, constant_model, frame):
        with pytest.raises(OutOfRangeError):
            get_alt(constant_model, response_frame=frame)
    
    @pytest.mark.parametrize("frame", [29.0, "29", True])
    def test_non_integer_frame(self, constant_model, frame):
        with pytest.raises(InvalidInputError, match="integer"):
            get_alt(constant_model, response_frame=frame)
    
    def test_numpy_integer_frame(self, constant_model):
        report = get_alt(constant_model, response_frame=np.int64(29))
        assert report.response_frame == 29
        assert type(report.to_dict()["response_frame"]) is int
    
    def test_last_frame_allowed(self, constant_model):
        report = get_alt(constant_model, response_frame=30)
        assert report.response_frame_adjusted == 30
    
    def test_latency_before_frame_two(self, constant_model):
        with pytest.raises(UnextractableError, match="Latency"):
            get_alt(constant_model, response_frame=5, latency=0.2)
    
    def test_negative_latency(self, constant_model):
        with pytest.raises(InvalidInputError, match="latency"):
            get_alt(constant_model, response_frame=10, latency=-0.1)
    
    @pytest.mark.parametrize("distance", [0, -20])
    def test_non_positive_new_distance(self, constant_model, distance):
        with pytest.raises(InvalidInputError, match="new_distance"):
            get_alt(constant_model, response_frame=10, new_distance=distance)
    
    def test_rejects_non_model(self, constant_model):
        with pytest.raises(InvalidInputError):
            get_alt(constant_model.series, response_frame=10)
        with pytest.raises(InvalidInputError):
            get_alt([1, 2, 3], response_frame=2)
    
    def test_variant_checked_first(self):
        with pytest.raises(InvalidInputError):
            get_alt("model")


class TestAltReport:
    """Tests for AltReport output."""
    
    def test_to_dict(self, constant_model):
        report = get_alt(constant_model, response_frame=29, latency=0.2)
        result = report.to_dict()
        
        assert result["model"] == "constant_speed"
        assert result["response_frame"] == 29
        assert result["response_frame_adjusted"] == 23
        assert result["latency_applied"] == 0.2
        assert result["new_distance_applied"] is None
        assert result["alt"] == round(report.alt, 4)
        assert result["speed_in_model"] == 500
    
    def test_to_dict_diameter(self, diameter_model_small):
        report = get_alt(diameter_model_small, response_frame=10, new_distance=20)
        result = report.to_dict()
        
        assert result["model"] == "diameter"
        assert result["distance_perceived"] is None
        assert result["new_distance_applied"] == 20
    
    def test_summary(self, constant_model):
        report = get_alt(constant_model, response_frame=29, latency=0.2)
        summary = report.summary()
        
        assert "Extraction complete." in summary
        assert "Response Frame Adjusted:   23" in summary
        assert "Latency Applied:           0.2s" in summary
        assert "New Screen Distance:       n/a" in summary
        assert f"ALT: {round(report.alt, 4)} radians/sec" in summary
        assert str(report) == summary
    
    def test_summary_new_distance(self, constant_model):
        report = get_alt(constant_model, response_frame=29, new_distance=40)
        assert "New Screen Distance:       40cm" in report.summary()
    
    def test_repr(self, constant_model):
        report = get_alt(constant_model, response_frame=29, latency=0.2)
        assert "29->23" in repr(report)
        assert "constant_speed" in repr(report)
