from .base import (ID_TRAIT_TYPE, META, META_FUNCTIONS, NONE, NONE_TRAIT, TRAIT_COUNT, TRAITS, make_trait,
                   register)
from .custom import creatureworld, deathbats, mutant_apes
from .ens import (ENS_COLLECTIONS, NumericIdError, build_id_lookup, find_id_trait, find_number, id_digits,
                  id_trait, is_ens_collection)
from .matches import get_trait_matches, match_traits


def trait_count_trait(traits) -> dict:
    # a declared trait count wins over counting
    for trait in traits:
        if trait['typeValue'] == TRAIT_COUNT:
            return make_trait(TRAIT_COUNT, trait['value'])
    return make_trait(TRAIT_COUNT, sum(1 for t in traits if t['category'] != NONE))


def get_meta_traits(traits, collection: str, add_meta: bool = True) -> list:
    meta_traits = [trait_count_trait(traits)]
    if not add_meta:
        return meta_traits
    meta_function = META_FUNCTIONS.get(collection)
    if meta_function is not None:
        meta_traits.extend(meta_function(traits))
    meta_traits.extend(match_traits(traits, collection))
    return meta_traits


def augment_nft(nft, add_meta: bool = True, id_lookups=None) -> dict:
    collection = nft.get('collection')
    traits = [dict(t) for t in nft['traits']]
    if is_ens_collection(collection):
        number = find_number(nft, collection, id_lookups)
        if find_id_trait(traits) is None:
            traits.append(id_trait(number))
    meta_traits = get_meta_traits(traits, collection, add_meta)
    traits = [t for t in traits if t['typeValue'] != TRAIT_COUNT]
    return {**nft, 'traits': traits + meta_traits}


__all__ = [
    'TRAITS', 'META', 'NONE', 'TRAIT_COUNT', 'ID_TRAIT_TYPE', 'NONE_TRAIT',
    'META_FUNCTIONS', 'register', 'make_trait',
    'creatureworld', 'deathbats', 'mutant_apes',
    'ENS_COLLECTIONS', 'NumericIdError', 'build_id_lookup', 'find_number', 'id_digits', 'is_ens_collection',
    'get_trait_matches', 'get_meta_traits', 'augment_nft', 'trait_count_trait',
]
