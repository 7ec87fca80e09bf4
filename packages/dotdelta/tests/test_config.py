import pytest

from dotdelta.config import Settings, parse_log_level
from dotdelta.errors import ConfigurationError, DotDeltaError, LexError, ParseError, SourceError


def test_defaults_when_environment_is_empty():
    settings = Settings.from_env(environ={})

    assert settings == Settings(
        http_timeout=10.0, poll_interval=60.0, log_level="WARNING", json_indent=2
    )


def test_values_are_read_from_environment():
    settings = Settings.from_env(
        environ={
            "DOTDELTA_HTTP_TIMEOUT": "2.5",
            "DOTDELTA_POLL_INTERVAL": "30",
            "DOTDELTA_LOG_LEVEL": "debug",
            "DOTDELTA_JSON_INDENT": "none",
        }
    )

    assert settings.http_timeout == 2.5
    assert settings.poll_interval == 30.0
    assert settings.log_level == "DEBUG"
    assert settings.json_indent is None


@pytest.mark.parametrize(
    "environ",
    [
        {"DOTDELTA_HTTP_TIMEOUT": "fast"},
        {"DOTDELTA_POLL_INTERVAL": "0"},
        {"DOTDELTA_LOG_LEVEL": "chatty"},
        {"DOTDELTA_JSON_INDENT": "-1"},
        {"DOTDELTA_JSON_INDENT": "wide"},
    ],
)
def test_invalid_values_raise_configuration_error(environ):
    with pytest.raises(ConfigurationError):
        Settings.from_env(environ=environ)


def test_parse_log_level_normalises_case():
    assert parse_log_level(" info ") == "INFO"


class TestErrors:
    def test_all_errors_share_a_base(self):
        for error in (
            LexError("bad", offset=1),
            ParseError(position=0, expected="x", found="y"),
            SourceError("gone", location="a.dot"),
            ConfigurationError("nope"),
        ):
            assert isinstance(error, DotDeltaError)

    def test_cause_is_kept(self):
        cause = OSError("disk")
        err = SourceError("gone", location="a.dot", cause=cause)

        assert err.cause is cause
        assert str(err) == "gone"
