"""Tests for tabstats.validation."""

import pytest

from tabstats.config import TabstatsConfig
from tabstats.errors import InvalidInputError, RejectedInputError
from tabstats.validation import (
    ForbiddenPhraseValidator,
    default_validators,
    run_validators,
)


class TestForbiddenPhrase:
    def test_rejects_phrase(self):
        validator = ForbiddenPhraseValidator(["Sonny Hayes"])
        with pytest.raises(RejectedInputError) as excinfo:
            validator("driver,number\nSonny Hayes,7\n")
        assert "Sonny Hayes" in str(excinfo.value)
        assert excinfo.value.rule == "forbidden_phrase"

    def test_case_sensitive(self):
        ForbiddenPhraseValidator(["Sonny Hayes"])("driver\nsonny hayes\n")

    def test_rejection_is_invalid_input(self):
        assert issubclass(RejectedInputError, InvalidInputError)

    def test_checks_raw_text_before_parsing(self):
        # Malformed text is still rejected by the phrase rule first.
        with pytest.raises(RejectedInputError):
            ForbiddenPhraseValidator(["bad"])("a,b\nbad\n")

    def test_ignores_empty_phrases(self):
        assert ForbiddenPhraseValidator(["", "x"]).phrases == ("x",)


class TestValidatorChain:
    def test_default_chain(self):
        validators = default_validators(TabstatsConfig())
        assert len(validators) == 1
        with pytest.raises(RejectedInputError):
            run_validators("Sonny Hayes", validators)

    def test_no_phrases_no_validators(self):
        assert default_validators(TabstatsConfig(forbidden_phrases=())) == []

    def test_runs_in_order(self):
        calls = []

        def first(text):
            calls.append("first")

        def second(text):
            calls.append("second")
            raise RejectedInputError("nope")

        def third(text):
            calls.append("third")

        with pytest.raises(RejectedInputError):
            run_validators("a", [first, second, third])
        assert calls == ["first", "second"]
