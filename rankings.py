import json
import logging
from pathlib import Path

import click
import pystache
import yaml

from metatraits import META, TRAIT_COUNT, NumericIdError
from rarity import rank_collection

logger = logging.getLogger(__name__)

DEFAULT_CONFIG = {
    'log_level': 'INFO',
    'add_meta': True,
    'drop_input_meta': True,
    'top': 5,
    'report_size': 100,
    'rankings_file': 'collection-rankings.json',
    'traits_file': 'collection-traits.json',
    'report_file': 'collection-report.html',
}

REPORT_TEMPLATE = '''<head>
    <style type="text/css">
        .nft {
            display: flex;
            flex-direction: column;
            height: 400px;
            width: 300px;
        }

        .nft-info {
            color: #1F1F1F;
            font-size: 36px;
            margin-left: 16px;
        }

        .rankings {
            display: flex;
            flex-wrap: wrap;
            justify-content: space-between;
            flex-direction: row;
        }
    </style>
</head>
<body>
    <div class="rankings">
{{#nfts}}
        <div class="nft">
            <span class="nft-info">{{rarityTraitSumRank}}</span>
            <img src="{{imageUrl}}"></img>
            <span class="nft-info">{{name}}</span>
        </div>
{{/nfts}}
    </div>
</body>
'''


def load_config(path) -> dict:
    config = dict(DEFAULT_CONFIG)
    if path is None:
        return config
    try:
        with open(path) as f:
            loaded = yaml.safe_load(f) or {}
    except OSError as e:
        raise click.ClickException(f'Cannot read config {path}: {e}')
    except yaml.YAMLError as e:
        raise click.ClickException(f'Invalid config {path}: {e}')
    if not isinstance(loaded, dict):
        raise click.ClickException(f'Config {path} must be a mapping')
    config.update(loaded)
    return config


def load_nfts(path, drop_meta: bool = True) -> list:
    with open(path) as f:
        try:
            nfts = json.load(f)
        except json.JSONDecodeError as e:
            raise click.ClickException(f'Invalid NFT data {path}: {e}')
    if not isinstance(nfts, list):
        raise click.ClickException(f'{path} must contain a list of NFTs')
    if drop_meta:
        # meta traits get recomputed, a declared trait count is kept
        nfts = [{**nft, 'traits': [t for t in nft.get('traits', [])
                                  if t.get('category') != META or t.get('typeValue') == TRAIT_COUNT]}
                for nft in nfts]
    logger.info(f'Loaded {len(nfts)} NFTs from {path}')
    return nfts


def by_rank(ranked) -> list:
    return sorted(ranked, key=lambda nft: nft['rarityTraitSumRank'])


def render_report(ranked, size: int = 100) -> str:
    return pystache.render(REPORT_TEMPLATE, {'nfts': by_rank(ranked)[:size]})


def write_json(path: Path, data):
    with open(path, 'w') as f:
        json.dump(data, f)


@click.command('NFT Rarity', context_settings={'auto_envvar_prefix': 'RARITY'})
@click.option('--data', required=True, type=click.Path(exists=True, dir_okay=False))
@click.option('--config', type=click.Path(exists=True, dir_okay=False))
@click.option('--out-dir', type=click.Path(file_okay=False), default='.')
@click.option('--no-meta', is_flag=True, help='Only derive the trait count meta trait.')
def main(data: str, config: str, out_dir: str, no_meta: bool):
    if config is None and Path('rarity.yaml').exists():
        config = 'rarity.yaml'
    settings = load_config(config)
    logging.basicConfig(level=getattr(logging, str(settings['log_level']).upper(), logging.INFO))

    nfts = load_nfts(data, settings['drop_input_meta'])
    click.echo(f'Loaded {len(nfts)} NFTs')
    try:
        ranked, catalog = rank_collection(nfts, add_meta=settings['add_meta'] and not no_meta)
    except NumericIdError as e:
        raise click.ClickException(str(e))
    ranked = by_rank(ranked)

    out = Path(out_dir)
    out.mkdir(parents=True, exist_ok=True)
    write_json(out / settings['rankings_file'], ranked)
    write_json(out / settings['traits_file'], catalog)
    with open(out / settings['report_file'], 'w') as f:
        f.write(render_report(ranked, settings['report_size']))

    click.echo(f"And your top {settings['top']} are:")
    for nft in ranked[:settings['top']]:
        click.echo(f"#{nft['rarityTraitSumRank']} ID: {nft['id']}, name: {nft.get('name')}, "
                   f"score: {nft['rarityTraitSum']}")


if __name__ == '__main__':
    main()
