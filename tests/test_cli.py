"""
Command Line Tests
==================

Tests for the loomer command line entry point.
"""

import json

import pytest

from loomer.cli import build_arg_parser, main, read_speed_profile
from loomer.errors import InvalidInputError


class TestMain:
    """Tests for main."""
    
    def test_constant_without_response(self, isolated_config, capsys):
        code = main([
            "constant", "--speed", "500", "--start-distance", "500", "--frame-rate", "30",
        ])
        out = capsys.readouterr().out
        
        assert code == 0
        assert "ConstantSpeedModel(frames=30" in out
        assert "AnnotatedSequence(frames=30" in out
        assert "Animation duration: 1.00s" in out
    
    def test_constant_alt_json(self, isolated_config, capsys):
        code = main([
            "constant",
            "--speed", "500",
            "--start-distance", "500",
            "--frame-rate", "30",
            "--attacker-diameter", "10",
            "--response-frame", "29",
            "--latency", "0.2",
            "--json",
        ])
        result = json.loads(capsys.readouterr().out)
        
        assert code == 0
        assert result["model"] == "constant_speed"
        assert result["response_frame_adjusted"] == 23
    
    def test_variable_summary(self, isolated_config, capsys):
        code = main([
            "variable", "--speeds", "100,150,200,250,300", "--response-frame", "3",
        ])
        out = capsys.readouterr().out
        
        assert code == 0
        assert "VariableSpeedModel(frames=5" in out
        assert "The Apparent Looming Threshold is:" in out
    
    def test_variable_from_file(self, isolated_config, capsys):
        path = isolated_config / "speeds.txt"
        path.write_text("100\n200\n300\n")
        
        assert main(["variable", "--speeds-file", str(path)]) == 0
        assert "VariableSpeedModel(frames=3" in capsys.readouterr().out
    
    def test_diameter_alt(self, isolated_config, capsys):
        code = main([
            "diameter", "--duration", "1", "--frame-rate", "30",
            "--response-frame", "20", "--new-distance", "20", "--json",
        ])
        result = json.loads(capsys.readouterr().out)
        
        assert code == 0
        assert result["model"] == "diameter"
        assert result["new_distance_applied"] == 20
    
    def test_diameter_missing_distance(self, isolated_config):
        assert main(["diameter", "--response-frame", "20"]) == 2
    
    def test_invalid_parameter(self, isolated_config):
        assert main(["constant", "--speed", "-1"]) == 2
    
    def test_response_frame_out_of_range(self, isolated_config):
        assert main(["constant", "--frame-rate", "30", "--response-frame", "1000"]) == 2
    
    def test_config_file_defaults(self, isolated_config, capsys):
        (isolated_config / "loomer.yaml").write_text(
            "constant_speed:\n  start_distance: 500\n  frame_rate: 30\n"
        )
        assert main(["constant"]) == 0
        assert "ConstantSpeedModel(frames=30" in capsys.readouterr().out
    
    def test_explicit_config_ignores_local_file(self, isolated_config, capsys):
        (isolated_config / "loomer.yaml").write_text("constant_speed:\n  speed: -5\n")
        good = isolated_config / "good.yaml"
        good.write_text("constant_speed:\n  speed: 500\n  start_distance: 500\n  frame_rate: 30\n")
        
        assert main(["--config", str(good), "constant"]) == 0
        assert "ConstantSpeedModel(frames=30" in capsys.readouterr().out
    
    def test_invalid_config_file(self, isolated_config):
        (isolated_config / "loomer.yaml").write_text("constant_speed:\n  speed: -5\n")
        assert main(["constant"]) == 2
    
    def test_malformed_yaml(self, isolated_config):
        (isolated_config / "loomer.yaml").write_text("constant_speed: [unclosed\n")
        assert main(["constant"]) == 2
    
    def test_malformed_environment(self, isolated_config, monkeypatch):
        monkeypatch.setenv("LOOMER_FRAME_RATE", "fast")
        assert main(["constant"]) == 2
    
    def test_missing_speeds_file(self, isolated_config):
        missing = isolated_config / "missing.txt"
        assert main(["variable", "--speeds-file", str(missing)]) == 2
    
    def test_unknown_expansion(self, isolated_config):
        with pytest.raises(SystemExit):
            main(["diameter", "--expansion", "fast"])
    
    def test_variable_requires_profile(self, isolated_config):
        with pytest.raises(SystemExit):
            main(["variable"])


class TestReadSpeedProfile:
    """Tests for read_speed_profile."""
    
    def test_comma_separated(self):
        assert read_speed_profile("100, 200,300") == [100.0, 200.0, 300.0]
    
    def test_single_line_file(self, tmp_path):
        path = tmp_path / "speeds.txt"
        path.write_text("250\n")
        assert read_speed_profile(speeds_file=path) == [250.0]
    
    def test_missing_file(self, tmp_path):
        with pytest.raises(InvalidInputError, match="Could not read"):
            read_speed_profile(speeds_file=tmp_path / "missing.txt")
    
    def test_non_numeric(self):
        with pytest.raises(InvalidInputError):
            read_speed_profile("100,fast")
    
    def test_parser_subcommands(self):
        args = build_arg_parser().parse_args(["diameter", "--expansion", "constant_diameter"])
        assert args.model == "diameter"
        assert args.expansion_policy == "constant_diameter"
