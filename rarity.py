import logging
from collections import Counter
from decimal import ROUND_HALF_UP, Decimal

import numpy as np

from metatraits import META, NONE, NONE_TRAIT, TRAIT_COUNT, augment_nft, is_ens_collection

logger = logging.getLogger(__name__)


def is_scored(trait) -> bool:
    # meta traits other than the trait count are presentation only
    return trait['category'] != META or trait['typeValue'] == TRAIT_COUNT


def is_meta_type(trait_values) -> bool:
    return any(t['category'] == META for t in trait_values)


def round3(x) -> float:
    # halves round up, not to even
    return float(Decimal(x).quantize(Decimal('0.001'), rounding=ROUND_HALF_UP))


def calculate_base_trait_score(trait_count: int, collection_size: int, num_values: int) -> float:
    return collection_size / num_values / trait_count


def calculate_trait_score(trait_count: int, collection_size: int, num_values: int, weight: float) -> float:
    return round3(weight * calculate_base_trait_score(trait_count, collection_size, num_values))


def build_catalog(nfts) -> dict:
    # collect trait occurrences, remembering the first form seen of every value
    counter = Counter()
    first_seen = {}
    for nft in nfts:
        for trait in nft['traits']:
            key = (trait['typeValue'], str(trait['value']))
            counter[key] += 1
            first_seen.setdefault(key, trait)
    catalog = {}
    for (trait_type, value), count in counter.items():
        trait = first_seen[trait_type, value]
        catalog.setdefault(trait_type, []).append({
            'typeValue': trait_type,
            'value': value,
            'category': trait['category'],
            'displayType': trait.get('displayType'),
            'traitCount': count,
            'rarityScore': 0,
        })
    # add "None" values for the nfts lacking a (non meta) trait type
    nft_types = [{t['typeValue'] for t in nft['traits']} for nft in nfts]
    for trait_type, trait_values in catalog.items():
        if is_meta_type(trait_values):
            continue
        missing = sum(1 for types in nft_types if trait_type not in types)
        if not missing:
            continue
        none_trait = next((t for t in trait_values if t['value'] == NONE_TRAIT), None)
        if none_trait is None:
            trait_values.append({'typeValue': trait_type, 'value': NONE_TRAIT, 'category': NONE,
                                 'displayType': None, 'traitCount': missing, 'rarityScore': 0})
        else:
            none_trait['traitCount'] += missing
    return {trait_type: sorted(catalog[trait_type], key=lambda t: (-t['traitCount'], t['value']))
            for trait_type in sorted(catalog)}


def calculate_collection_weight(catalog, collection_size: int) -> float:
    # pins the most common scored trait value to a score of 1
    base_scores = [calculate_base_trait_score(t['traitCount'], collection_size, len(trait_values))
                   for trait_values in catalog.values()
                   if all(is_scored(t) for t in trait_values)
                   for t in trait_values]
    if not base_scores:
        return 1.0
    return 1 / min(base_scores)


def rate_catalog(catalog, collection_size: int, weight: float) -> dict:
    rated = {}
    for trait_type, trait_values in catalog.items():
        rated[trait_type] = [
            {**t, 'rarityScore': calculate_trait_score(t['traitCount'], collection_size, len(trait_values), weight)
             if is_scored(t) else 0}
            for t in trait_values]
    return rated


def index_catalog(catalog) -> dict:
    return {trait_type: {t['value']: t for t in trait_values} for trait_type, trait_values in catalog.items()}


def rate_nft(nft, catalog, index=None) -> dict:
    if index is None:
        index = index_catalog(catalog)
    traits = list(nft['traits'])
    present = {t['typeValue'] for t in traits}
    for trait_type, values in index.items():
        if trait_type in present:
            continue
        # meta types never get a None value
        none_trait = values.get(NONE_TRAIT)
        if none_trait is not None and none_trait['category'] != META:
            traits.append(none_trait)
    rated_traits = []
    rarity_score = 0
    for trait in traits:
        rated = index.get(trait['typeValue'], {}).get(str(trait['value']))
        if rated is None:
            continue
        rated_traits.append(dict(rated))
        if is_scored(rated):
            rarity_score = round3(rarity_score + rated['rarityScore'])
    if is_ens_collection(nft.get('collection')):
        # names and numbers have no rarity
        rarity_score = 0
    rated_traits.sort(key=lambda t: -t['rarityScore'])
    return {**nft, 'traits': rated_traits, 'rarityTraitSum': rarity_score}


def competition_ranks(scores) -> list:
    # rank = 1 + number of strictly higher scores, so ties share a rank
    scores = np.asarray(scores, dtype=float)
    ascending = np.sort(scores)
    higher = len(scores) - np.searchsorted(ascending, scores, side='right')
    return [int(r) for r in higher + 1]


def rank_collection(nfts, add_meta: bool = True):
    if not nfts:
        return [], {}
    id_lookups = {}
    nfts = [augment_nft(nft, add_meta, id_lookups) for nft in nfts]
    collection_size = len(nfts)
    catalog = build_catalog(nfts)
    weight = calculate_collection_weight(catalog, collection_size)
    logger.info(f'Rating {collection_size} NFTs of {nfts[0].get("collection")} over {len(catalog)} '
                f'trait types (weight {weight:.4f})')
    catalog = rate_catalog(catalog, collection_size, weight)
    index = index_catalog(catalog)
    rated = [rate_nft(nft, catalog, index) for nft in nfts]
    ranks = competition_ranks([nft['rarityTraitSum'] for nft in rated])
    return [{**nft, 'rarityTraitSumRank': rank} for nft, rank in zip(rated, ranks)], catalog
