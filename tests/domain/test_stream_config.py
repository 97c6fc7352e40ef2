from __future__ import annotations

import dataclasses

import pytest

from lib_syslog_dgram.domain.stream_config import DEFAULT_PATH, Profile, StreamConfig
from tests.os_markers import OS_AGNOSTIC

pytestmark = [OS_AGNOSTIC]


def test_build_uses_local0_profile_by_default() -> None:
    config = StreamConfig.build(name="app")

    assert config == StreamConfig(facility=16, name="app", path=DEFAULT_PATH)


def test_build_user_profile_defaults_to_user_facility() -> None:
    assert StreamConfig.build(name="app", profile=Profile.USER).facility == 1


def test_explicit_facility_overrides_profile() -> None:
    config = StreamConfig.build(name="app", facility="mail", path="/run/log", profile=Profile.USER)

    assert (config.facility, config.path) == (2, "/run/log")


def test_config_is_immutable() -> None:
    config = StreamConfig.build(name="app")

    with pytest.raises(dataclasses.FrozenInstanceError):
        config.facility = 3  # type: ignore[misc]


@pytest.mark.parametrize(
    "kwargs",
    [
        {"facility": 24, "name": "app"},
        {"facility": 1, "name": ""},
        {"facility": 1, "name": "app", "path": ""},
    ],
)
def test_config_rejects_invalid_values(kwargs: dict[str, object]) -> None:
    with pytest.raises(ValueError):
        StreamConfig(**kwargs)  # type: ignore[arg-type]


def test_profile_from_name() -> None:
    assert Profile.from_name("user") is Profile.USER
    with pytest.raises(ValueError, match="Unknown stream profile"):
        Profile.from_name("kernel")
