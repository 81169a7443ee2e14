"""Engine configuration: profiles, policy parsing and override order."""

import pytest

from headache.config import (
    ConfigError, DEFAULT_CELL_BITS, ENV_CELL_BITS, ENV_EOF, EngineConfig, EofPolicy,
    PROFILES, parse_cell_bits, parse_eof_policy,
)


class TestParsing:
    @pytest.mark.parametrize("text,policy", [
        ("unchanged", EofPolicy.UNCHANGED),
        ("ZERO", EofPolicy.ZERO),
        ("0", EofPolicy.ZERO),
        ("-1", EofPolicy.MAX),
        ("max", EofPolicy.MAX),
        (" fault ", EofPolicy.FAULT),
    ])
    def test_eof_policy(self, text, policy):
        assert parse_eof_policy(text) is policy

    def test_bad_eof_policy(self):
        with pytest.raises(ConfigError, match="Unknown EOF policy"):
            parse_eof_policy("explode")

    @pytest.mark.parametrize("value", ["8", 16, "32"])
    def test_cell_bits(self, value):
        assert parse_cell_bits(value) == int(value)

    @pytest.mark.parametrize("value", [7, "64", "eight", None])
    def test_bad_cell_bits(self, value):
        with pytest.raises(ConfigError):
            parse_cell_bits(value)


class TestEngineConfig:
    def test_defaults(self):
        cfg = EngineConfig()
        assert cfg.cell_bits == DEFAULT_CELL_BITS == 8
        assert cfg.eof_policy is EofPolicy.UNCHANGED

    def test_invalid_width_rejected(self):
        with pytest.raises(ConfigError):
            EngineConfig(cell_bits=12)

    def test_policy_must_be_enum(self):
        with pytest.raises(ConfigError):
            EngineConfig(eof_policy="zero")

    @pytest.mark.parametrize("name", list(PROFILES))
    def test_every_profile_builds(self, name):
        cfg = EngineConfig.from_profile(name)
        assert cfg.cell_bits == PROFILES[name]["cell_bits"]
        assert cfg.eof_policy is PROFILES[name]["eof_policy"]

    def test_unknown_profile(self):
        with pytest.raises(ConfigError, match="Unknown profile"):
            EngineConfig.from_profile("turbo")


class TestResolve:
    def test_profile_only(self):
        cfg = EngineConfig.resolve("legacy", environ={})
        assert cfg == EngineConfig(cell_bits=32, eof_policy=EofPolicy.FAULT)

    def test_environment_overrides_profile(self):
        cfg = EngineConfig.resolve("standard", environ={ENV_CELL_BITS: "16", ENV_EOF: "-1"})
        assert cfg.cell_bits == 16
        assert cfg.eof_policy is EofPolicy.MAX

    def test_arguments_override_environment(self):
        cfg = EngineConfig.resolve("standard", cell_bits=32, eof="zero",
                                   environ={ENV_CELL_BITS: "16", ENV_EOF: "fault"})
        assert cfg.cell_bits == 32
        assert cfg.eof_policy is EofPolicy.ZERO

    def test_empty_environment_values_ignored(self):
        cfg = EngineConfig.resolve("standard", environ={ENV_CELL_BITS: "", ENV_EOF: ""})
        assert cfg == EngineConfig()

    def test_bad_environment_value(self):
        with pytest.raises(ConfigError):
            EngineConfig.resolve("standard", environ={ENV_CELL_BITS: "9"})
