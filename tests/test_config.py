import pytest
import yaml

from meanforce.io.writer import ResultsWriter
from meanforce.utils.config_manager import ConfigManager, DEFAULT_CONFIG


def test_defaults_are_copied():
    cfg = ConfigManager()
    cfg.config['input']['files'].append('x.dat')
    assert DEFAULT_CONFIG['input']['files'] == []


def test_defaults_fail_without_atom_count():
    with pytest.raises(ValueError, match="n_atoms"):
        ConfigManager().validate()


def test_from_dict_validates():
    cfg = ConfigManager.from_dict({'system': {'n_atoms': 4}, 'input': {'files': ['a.dat']}})
    cfg.validate()
    assert cfg.get_section('statistics')['pooled'] is True
    assert cfg.get_section('system')['use_mass'] is False


@pytest.mark.parametrize("n_atoms", [3, 0, -2, 4.0, True])
def test_bad_atom_count(n_atoms):
    cfg = ConfigManager.from_dict({'system': {'n_atoms': n_atoms}, 'input': {'files': ['a.dat']}})
    with pytest.raises(ValueError):
        cfg.validate()


def test_mass_needs_psf():
    cfg = ConfigManager.from_dict({'system': {'n_atoms': 4, 'use_mass': True}, 'input': {'files': ['a.dat']}})
    with pytest.raises(ValueError, match="psf_file"):
        cfg.validate()


def test_scan_replaces_file_list():
    cfg = ConfigManager.from_dict({'system': {'n_atoms': 4}, 'input': {'scan': True}})
    cfg.validate()


def test_no_inputs():
    cfg = ConfigManager.from_dict({'system': {'n_atoms': 4}})
    with pytest.raises(ValueError, match="No input files"):
        cfg.validate()


def test_yaml_merges_over_defaults(tmp_path):
    path = tmp_path / "run.yaml"
    path.write_text(yaml.dump({'system': {'n_atoms': 8}, 'statistics': {'pooled': False}}))
    cfg = ConfigManager(path)
    assert cfg.get_section('system')['n_atoms'] == 8
    assert cfg.get_section('system')['mass_tolerance'] == 0.001
    assert cfg.get_section('statistics')['pooled'] is False
    assert cfg.get_section('input')['tail'] == '.fout.dat'


def test_yaml_must_be_mapping(tmp_path):
    path = tmp_path / "run.yaml"
    path.write_text("- a\n- b\n")
    with pytest.raises(ValueError, match="mapping"):
        ConfigManager(path)


def test_missing_config_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        ConfigManager(tmp_path / "nope.yaml")


def test_saved_config_reloads(tmp_path):
    cfg = ConfigManager.from_dict({'system': {'n_atoms': 6}})
    saved = ResultsWriter(tmp_path).save_config(cfg.to_dict())
    assert ConfigManager(saved).to_dict() == cfg.to_dict()
