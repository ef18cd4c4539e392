import pathlib

import pytest

import strumline.config
import strumline.errors


def test_defaults_melodic () -> None:

	"""A bare config is a 4/4 nylon guitar at 100 BPM on channel 0."""

	config = strumline.config.InstrumentConfig()

	assert config.name == "Guitar"
	assert config.channel == 0
	assert config.percussion is False
	assert config.instrument == "Acoustic Guitar(nylon)"
	assert config.strings == "E2 A2 D3 G3 B3 E4"
	assert config.beats_per_measure == 4
	assert config.beat_unit == 4
	assert config.ticks_per_measure == 4 * 192


def test_percussion_channel_selects_percussion () -> None:

	"""Channel 9 implies percussion defaults."""

	config = strumline.config.InstrumentConfig(channel=9)

	assert config.percussion is True
	assert config.name == "Percussion"
	assert config.instrument == 0


def test_percussion_flag_selects_channel () -> None:

	"""percussion=True defaults to channel 9."""

	assert strumline.config.InstrumentConfig(percussion=True).channel == 9


@pytest.mark.parametrize("signature, expected", [
	("4/4", (4, 4)),
	("3/4", (3, 4)),
	("6/8", (6, 8)),
	("2/2", (2, 2)),
	("7/16", (7, 16)),
])
def test_parse_signature (signature: str, expected: tuple) -> None:

	"""Time signatures split into numerator and denominator."""

	assert strumline.config.InstrumentConfig.parse_signature(signature) == expected


@pytest.mark.parametrize("signature", ["4", "4/3", "0/4", "four/four", "4/4/4", "3/12"])
def test_invalid_signature (signature: str) -> None:

	"""Malformed or non power-of-two signatures are configuration errors."""

	with pytest.raises(strumline.errors.ConfigurationError, match="Invalid time signature"):
		strumline.config.InstrumentConfig(signature=signature)


@pytest.mark.parametrize("field, value", [
	("channel", 16),
	("channel", -1),
	("volume", 1.6),
	("volume", -0.1),
	("rtime", 11),
	("rvol", 7),
	("bpm", 0),
	("lead", -1),
	("ticks", 0),
])
def test_out_of_range_values (field: str, value: float) -> None:

	"""Every bounded option is validated at construction."""

	with pytest.raises(strumline.errors.ConfigurationError):
		strumline.config.InstrumentConfig(**{field: value})


def test_from_dict_aliases () -> None:

	"""The short option spellings map onto fields."""

	config = strumline.config.InstrumentConfig.from_dict({
		"sig": "6/8",
		"tempo": 240,
		"instr": "Electric Guitar(clean)",
		"file": "out.mid",
	})

	assert config.signature == "6/8"
	assert config.bpm == 240
	assert config.instrument == "Electric Guitar(clean)"
	assert config.midi == "out.mid"


def test_from_dict_percussion_aliases () -> None:

	"""Percussion scripts use kit and instruments."""

	config = strumline.config.InstrumentConfig.from_dict({
		"percussion": True,
		"kit": 0,
		"instruments": ["Acoustic Bass Drum", "Closed Hi-Hat"],
	})

	assert config.instrument == 0
	assert config.strings == ["Acoustic Bass Drum", "Closed Hi-Hat"]


def test_from_dict_rejects_unknown_and_duplicates () -> None:

	"""Unknown options, and one option under two spellings, are rejected."""

	with pytest.raises(strumline.errors.ConfigurationError, match="Unknown instrument option: colour"):
		strumline.config.InstrumentConfig.from_dict({"colour": "red"})

	with pytest.raises(strumline.errors.ConfigurationError, match="given twice"):
		strumline.config.InstrumentConfig.from_dict({"bpm": 100, "tempo": 120})


def test_load_config (tmp_path: pathlib.Path) -> None:

	"""YAML documents load as dictionaries."""

	path = tmp_path / "score.yaml"
	path.write_text("instrument:\n  signature: 3/4\n  bpm: 90\n")

	assert strumline.config.load_config(str(path)) == {"instrument": {"signature": "3/4", "bpm": 90}}


def test_load_config_missing_and_empty (tmp_path: pathlib.Path) -> None:

	"""A missing file is an error, an empty one is an empty mapping."""

	with pytest.raises(strumline.errors.ConfigurationError, match="not found"):
		strumline.config.load_config(str(tmp_path / "missing.yaml"))

	empty = tmp_path / "empty.yaml"
	empty.write_text("")

	assert strumline.config.load_config(str(empty)) == {}


def test_load_config_requires_mapping (tmp_path: pathlib.Path) -> None:

	"""A YAML list at the top level is rejected."""

	path = tmp_path / "list.yaml"
	path.write_text("- 1\n- 2\n")

	with pytest.raises(strumline.errors.ConfigurationError, match="mapping"):
		strumline.config.load_config(str(path))
