"""
Tests for configuration loading and score weights.
"""

import copy

import pytest
import yaml

from conftest import CONFIG_PATH
from matchscore.configs import load_config, validate_config, get_config_value
from matchscore.scoring import ScoreWeights, DEFAULT_WEIGHTS, SUBSCORE_NAMES


@pytest.fixture
def config():
    return load_config(str(CONFIG_PATH))


class TestLoadConfig:
    """Test YAML configuration loading."""

    def test_shipped_config_is_valid(self, config):
        assert validate_config(config) == []

    def test_shipped_weights_match_defaults(self, config):
        assert ScoreWeights.from_config(config) == DEFAULT_WEIGHTS

    def test_empty_scoring_section_uses_default_weights(self):
        assert ScoreWeights.from_config({"scoring": None}) == DEFAULT_WEIGHTS
        assert ScoreWeights.from_config({"scoring": {"weights": None}}) == DEFAULT_WEIGHTS

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(str(tmp_path / "nope.yaml"))

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        with pytest.raises(ValueError, match="empty"):
            load_config(str(path))

    def test_roundtrip_through_yaml(self, tmp_path, config):
        path = tmp_path / "config.yaml"
        path.write_text(yaml.safe_dump(config))
        assert load_config(str(path)) == config


class TestValidateConfig:
    """Test configuration validation issues."""

    def test_missing_sections(self):
        issues = validate_config({})
        assert "Missing required section: global" in issues
        assert "Missing required section: scoring" in issues
        assert "Missing required section: ranking" in issues

    def test_weights_not_summing_to_one(self, config):
        bad = copy.deepcopy(config)
        bad["scoring"]["weights"]["religion"] = 0.5
        issues = validate_config(bad)
        assert len(issues) == 1
        assert "don't sum to 1" in issues[0]

    def test_small_rounding_tolerated(self, config):
        ok = copy.deepcopy(config)
        ok["scoring"]["weights"]["religion"] = 0.255
        assert validate_config(ok) == []

    def test_missing_weight(self, config):
        bad = copy.deepcopy(config)
        del bad["scoring"]["weights"]["lifestyle"]
        issues = validate_config(bad)
        assert any("Missing scoring.weights entries: ['lifestyle']" in i for i in issues)

    def test_unknown_weight(self, config):
        bad = copy.deepcopy(config)
        bad["scoring"]["weights"]["horoscope"] = 0.0
        issues = validate_config(bad)
        assert issues == ["Unknown scoring.weights entries: ['horoscope']"]

    def test_no_weights(self, config):
        bad = copy.deepcopy(config)
        bad["scoring"] = {}
        assert "Missing scoring.weights" in validate_config(bad)

    def test_bad_log_level(self, config):
        bad = copy.deepcopy(config)
        bad["global"]["log_level"] = "chatty"
        assert validate_config(bad) == ["Unknown global.log_level: CHATTY"]

    @pytest.mark.parametrize("key,value", [
        ("n_jobs", 0),
        ("n_jobs", "all"),
        ("daily_limit", 0),
        ("daily_limit", 2.5),
    ])
    def test_bad_ranking_values(self, config, key, value):
        bad = copy.deepcopy(config)
        bad["ranking"][key] = value
        issues = validate_config(bad)
        assert len(issues) == 1
        assert f"ranking.{key}" in issues[0]

    def test_all_cores_allowed(self, config):
        ok = copy.deepcopy(config)
        ok["ranking"]["n_jobs"] = -1
        assert validate_config(ok) == []

    def test_empty_sections_reported(self):
        """YAML keys left without a body come back as issues, not errors."""
        issues = validate_config({"global": None, "scoring": {"weights": None}, "ranking": None})
        assert issues == [
            "Section global is empty or not a mapping",
            "Section ranking is empty or not a mapping",
            "Missing scoring.weights",
        ]

    def test_empty_section_from_yaml(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("global:\nscoring:\n  weights:\nranking:\n")
        issues = validate_config(load_config(str(path)))
        assert "Section global is empty or not a mapping" in issues
        assert "Section scoring is empty or not a mapping" not in issues
        assert "Missing scoring.weights" in issues

    def test_weights_not_a_mapping(self, config):
        bad = copy.deepcopy(config)
        bad["scoring"]["weights"] = [0.5, 0.5]
        assert validate_config(bad) == ["scoring.weights must be a mapping, got list"]


class TestGetConfigValue:
    """Test dotted config lookup."""

    def test_nested(self, config):
        assert get_config_value(config, "scoring.weights.religion") == 0.25
        assert get_config_value(config, "ranking.daily_limit") == 10

    def test_default(self, config):
        assert get_config_value(config, "ranking.missing", 3) == 3
        assert get_config_value(config, "scoring.weights.religion.deep") is None


class TestScoreWeights:
    """Test weight validation and persistence."""

    def test_defaults_sum_to_one(self):
        assert DEFAULT_WEIGHTS.total() == pytest.approx(1.0)
        DEFAULT_WEIGHTS.validate()

    def test_default_values(self):
        assert DEFAULT_WEIGHTS.to_dict() == {
            "age": 0.15,
            "location": 0.20,
            "education": 0.15,
            "religion": 0.25,
            "lifestyle": 0.10,
            "preferences": 0.15,
        }

    def test_names_cover_fields(self):
        assert set(DEFAULT_WEIGHTS.to_dict()) == set(SUBSCORE_NAMES)

    def test_bad_sum(self):
        with pytest.raises(ValueError, match="sum to 1"):
            ScoreWeights(religion=0.5).validate()

    def test_negative_weight(self):
        weights = ScoreWeights(age=-0.15, location=0.50)
        with pytest.raises(ValueError, match="non-negative"):
            weights.validate()

    def test_from_dict_unknown(self):
        with pytest.raises(ValueError, match="Unknown sub-score weights"):
            ScoreWeights.from_dict({"horoscope": 0.1})

    def test_from_dict_partial_uses_defaults(self):
        weights = ScoreWeights.from_dict({"age": "0.15"})
        assert weights == DEFAULT_WEIGHTS

    def test_weighted_sum(self):
        breakdown = {name: 100 for name in SUBSCORE_NAMES}
        assert DEFAULT_WEIGHTS.weighted_sum(breakdown) == pytest.approx(100.0)

    def test_save_load(self, tmp_path):
        path = tmp_path / "weights.json"
        weights = ScoreWeights(age=0.2, location=0.2, education=0.2, religion=0.2,
                               lifestyle=0.1, preferences=0.1)
        weights.save(str(path))
        assert ScoreWeights.load(str(path)) == weights
