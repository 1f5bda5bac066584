import json

import click
import pytest
from click.testing import CliRunner

from rankings import DEFAULT_CONFIG, load_config, load_nfts, main, render_report
from rarity import rank_collection


@pytest.fixture
def data_file(tmp_path, collection):
    path = tmp_path / 'nfts.json'
    path.write_text(json.dumps(collection))
    return path


def test_load_config_defaults():
    assert load_config(None) == DEFAULT_CONFIG


def test_load_config_overrides(tmp_path):
    path = tmp_path / 'rarity.yaml'
    path.write_text('top: 3\nadd_meta: false\n')
    config = load_config(path)
    assert config['top'] == 3
    assert config['add_meta'] is False
    assert config['report_size'] == DEFAULT_CONFIG['report_size']


def test_load_config_rejects_lists(tmp_path):
    path = tmp_path / 'rarity.yaml'
    path.write_text('- top\n')
    with pytest.raises(click.ClickException):
        load_config(path)


def test_load_nfts_drops_meta(tmp_path):
    path = tmp_path / 'nfts.json'
    path.write_text(json.dumps([{'id': '1', 'traits': [
        {'typeValue': 'Hat', 'value': 'Cap', 'category': 'Traits', 'displayType': None},
        {'typeValue': 'Matches', 'value': '2 - cap', 'category': 'Meta', 'displayType': None},
    ]}]))
    assert [t['typeValue'] for t in load_nfts(path)[0]['traits']] == ['Hat']
    assert len(load_nfts(path, drop_meta=False)[0]['traits']) == 2


def test_load_nfts_rejects_objects(tmp_path):
    path = tmp_path / 'nfts.json'
    path.write_text('{"id": 1}')
    with pytest.raises(click.ClickException):
        load_nfts(path)


def test_render_report_escapes_and_limits():
    ranked = [{'rarityTraitSumRank': 2, 'name': '<b>second</b>', 'imageUrl': 'https://img/2.png'},
              {'rarityTraitSumRank': 1, 'name': 'first', 'imageUrl': 'https://img/1.png'}]
    report = render_report(ranked, size=1)
    assert 'first' in report
    assert 'second' not in report
    assert '&lt;b&gt;' in render_report(ranked)


def test_main_writes_outputs(tmp_path, data_file):
    out_dir = tmp_path / 'out'
    result = CliRunner().invoke(main, ['--data', str(data_file), '--out-dir', str(out_dir)])
    assert result.exit_code == 0, result.output
    assert 'And your top 5 are:' in result.output

    rankings = json.loads((out_dir / 'collection-rankings.json').read_text())
    assert len(rankings) == 50
    ranks = [n['rarityTraitSumRank'] for n in rankings]
    assert ranks == sorted(ranks)
    assert ranks[0] == 1
    traits = json.loads((out_dir / 'collection-traits.json').read_text())
    assert 'Background' in traits
    assert (out_dir / 'collection-report.html').read_text().count('class="nft"') == 50


def test_main_no_meta(tmp_path, data_file):
    out_dir = tmp_path / 'out'
    result = CliRunner().invoke(main, ['--data', str(data_file), '--out-dir', str(out_dir), '--no-meta'])
    assert result.exit_code == 0, result.output
    traits = json.loads((out_dir / 'collection-traits.json').read_text())
    assert 'Matches' not in traits


def test_main_reads_env(tmp_path, data_file):
    out_dir = tmp_path / 'out'
    result = CliRunner().invoke(main, [], env={'RARITY_DATA': str(data_file), 'RARITY_OUT_DIR': str(out_dir)})
    assert result.exit_code == 0, result.output
    assert (out_dir / 'collection-rankings.json').exists()


def test_main_reports_missing_ids(tmp_path):
    path = tmp_path / 'ens.json'
    path.write_text(json.dumps([{'id': '1', 'collection': '999club', 'name': 'unnamed', 'traits': []}]))
    result = CliRunner().invoke(main, ['--data', str(path), '--out-dir', str(tmp_path / 'out')])
    assert result.exit_code == 1
    assert 'No 3 digit number hashes to token id 1' in result.output


def test_load_config_unreadable(tmp_path):
    with pytest.raises(click.ClickException, match='Cannot read config'):
        load_config(tmp_path / 'missing.yaml')
    with pytest.raises(click.ClickException, match='Cannot read config'):
        load_config(tmp_path)


def test_main_missing_config(tmp_path, data_file):
    result = CliRunner().invoke(main, ['--data', str(data_file), '--config', str(tmp_path / 'nope.yaml'),
                                       '--out-dir', str(tmp_path / 'out')])
    assert result.exit_code == 2
    assert 'does not exist' in result.output
    assert not (tmp_path / 'out').exists()


def test_load_nfts_keeps_declared_trait_count(tmp_path):
    path = tmp_path / 'nfts.json'
    path.write_text(json.dumps([{'id': '1', 'collection': 'test-collection', 'traits': [
        {'typeValue': 'Hat', 'value': 'Cap', 'category': 'Traits', 'displayType': None},
        {'typeValue': 'Trait Count', 'value': '7', 'category': 'Meta', 'displayType': None},
        {'typeValue': 'Matches', 'value': '2 - cap', 'category': 'Meta', 'displayType': None},
    ]}]))
    nfts = load_nfts(path)
    assert [t['typeValue'] for t in nfts[0]['traits']] == ['Hat', 'Trait Count']
    ranked, _ = rank_collection(nfts)
    assert [t['value'] for t in ranked[0]['traits'] if t['typeValue'] == 'Trait Count'] == ['7']
