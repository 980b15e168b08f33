# test/test_splitter.py

import io

import pytest

from ssam.errors import CapacityError, ConfigError, ConsistencyError
from ssam.splitter.config import SamplerConfig, load_config
from ssam.splitter.sampler import create_rng
from ssam.splitter.splitter import SplitSampler


def test_in_memory_run_to_stream():
    sampler = SplitSampler(SamplerConfig(sizes=["3"], names=["sample"]), rng=create_rng(0))
    sampler.set_columns([["u1", "u2", "u3", "u4", "u5"]])

    out = io.StringIO()
    counts = sampler.run_sampling(default_stream=out)

    lines = out.getvalue().splitlines()
    assert len(lines) == 3
    assert lines == sorted(lines)
    assert counts == {"<stdout>": 3}


def test_split_info_and_report(tmp_path):
    config = SamplerConfig(sizes=["*", "2"], names=["train", "test"], seed=1, output=str(tmp_path))
    sampler = SplitSampler(config)
    sampler.set_columns([[str(i) for i in range(10)]])
    sampler.run_sampling()

    info = sampler.get_split_info()
    assert info["train"] == {"size": "*", "remainder": True, "target": 0}
    assert info["test"]["target"] == 2

    report = sampler.generate_split_report()
    assert list(report["set"]) == ["train", "test"]
    assert list(report["units"]) == [8, 2]
    assert (tmp_path / "out.test.txt").exists()


def test_exclusion_empties_data(tmp_path):
    reference = tmp_path / "ref.txt"
    reference.write_text("a\nb\n", encoding="utf-8")
    sampler = SplitSampler(SamplerConfig(exclude=[str(reference)]))
    sampler.set_columns([["a", "b", "a"]])
    with pytest.raises(ConsistencyError):
        sampler.apply_exclusions()


def test_capacity_checked_before_assignment():
    sampler = SplitSampler(SamplerConfig(sizes=["0.6", "0.6"]))
    sampler.set_columns([["x"] * 10])
    with pytest.raises(CapacityError):
        sampler.assign()
    assert sampler.assignment is None


def test_unknown_policy_in_config():
    with pytest.raises(ConfigError):
        SplitSampler(SamplerConfig(exclusion_policy="most"))


def test_config_validation():
    with pytest.raises(ConfigError):
        SamplerConfig(seed=2 ** 64)
    with pytest.raises(ConfigError):
        SamplerConfig(extension="")
    with pytest.raises(ConfigError):
        SamplerConfig.from_dict({"sizes": "*", "colour": "blue"})


def test_config_from_dict_accepts_strings_and_lists():
    config = SamplerConfig.from_dict({"sizes": "*,100", "names": ["train", "dev"], "seed": "17"})
    assert config.sizes == ["*", "100"]
    assert config.names == ["train", "dev"]
    assert config.seed == 17

    overridden = config.override(seed=3, names=None)
    assert overridden.seed == 3
    assert overridden.names == ["train", "dev"]


def test_load_config_errors(tmp_path):
    with pytest.raises(ConfigError):
        load_config(tmp_path / "missing.yaml")

    not_a_mapping = tmp_path / "list.yaml"
    not_a_mapping.write_text("- a\n- b\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(not_a_mapping)


def test_unknown_encoding_is_config_error():
    with pytest.raises(ConfigError):
        SamplerConfig(encoding="no-such-codec")
