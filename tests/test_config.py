from __future__ import annotations

import pytest

from completion_engine.completion import TriggerKind, min_word_len
from completion_engine.host import Editor
from completion_engine.runtime.config import WordCompletionConfig


def test_trigger_policy_defaults() -> None:
    assert min_word_len(TriggerKind.MANUAL) == 2
    assert min_word_len(TriggerKind.AUTO) == 8
    assert min_word_len(TriggerKind.TRIGGER_CHAR) == 8


def test_trigger_policy_follows_config() -> None:
    config = WordCompletionConfig(manual_trigger_length=3, trigger_length=5)

    assert min_word_len(TriggerKind.MANUAL, config) == 3
    assert min_word_len(TriggerKind.AUTO, config) == 5


def test_config_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("COMPLETION_ENGINE_WORD_COMPLETION", "off")
    monkeypatch.setenv("COMPLETION_ENGINE_WORD_TRIGGER_LENGTH", "4")
    monkeypatch.setenv("COMPLETION_ENGINE_WORD_PRIORITY", "not-a-number")

    config = WordCompletionConfig.from_env()

    assert config.enable is False
    assert config.trigger_length == 4
    assert config.manual_trigger_length == 2
    assert config.priority == 1


def test_config_rejects_non_positive_lengths() -> None:
    with pytest.raises(ValueError):
        WordCompletionConfig(trigger_length=0)
    with pytest.raises(ValueError):
        WordCompletionConfig(manual_trigger_length=-1)


def test_config_from_env_ignores_non_positive_lengths(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setenv("COMPLETION_ENGINE_WORD_TRIGGER_LENGTH", "0")
    monkeypatch.setenv("COMPLETION_ENGINE_WORD_MANUAL_LENGTH", "-3")

    config = WordCompletionConfig.from_env()

    assert config.trigger_length == 8
    assert config.manual_trigger_length == 2
    assert Editor().config == config
