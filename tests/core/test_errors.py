"""Tests for application error types."""

import pytest

from gitbaseline.core.errors import (
    CIEnvironmentError,
    ConfigError,
    ErrorCode,
    GitBaselineError,
)


class TestGitBaselineError:
    def test_str_includes_code_and_name(self) -> None:
        err = GitBaselineError(ErrorCode.CI_NOT_DETECTED, "no agent")
        assert str(err) == "[3001] CI_NOT_DETECTED: no agent"
        assert err.error_name == "CI_NOT_DETECTED"

    def test_to_dict(self) -> None:
        err = GitBaselineError(ErrorCode.CI_NOT_DETECTED, "no agent", {"k": "v"})
        assert err.to_dict() == {
            "code": 3001,
            "error": "CI_NOT_DETECTED",
            "message": "no agent",
            "details": {"k": "v"},
        }

    def test_is_raisable(self) -> None:
        with pytest.raises(GitBaselineError) as exc_info:
            raise ConfigError.parse_error("/tmp/x.yaml", "bad indent")
        assert exc_info.value.code == ErrorCode.CONFIG_PARSE_ERROR


class TestConfigError:
    def test_parse_error(self) -> None:
        err = ConfigError.parse_error("/etc/c.yaml", "bad indent")
        assert "/etc/c.yaml" in err.message
        assert err.details == {"path": "/etc/c.yaml", "reason": "bad indent"}

    def test_invalid_value(self) -> None:
        err = ConfigError.invalid_value("baseline.branch_match", "often", "not allowed")
        assert err.code == ErrorCode.CONFIG_INVALID_VALUE
        assert "baseline.branch_match" in err.message
        assert err.details["value"] == "often"


class TestCIEnvironmentError:
    def test_not_detected(self) -> None:
        err = CIEnvironmentError.not_detected("/agent/work")
        assert err.code == ErrorCode.CI_NOT_DETECTED
        assert "/agent/work" in str(err)

    def test_property_missing(self) -> None:
        err = CIEnvironmentError.property_missing("vcsroot.url")
        assert err.code == ErrorCode.CI_PROPERTY_MISSING
        assert err.details == {"property": "vcsroot.url"}
