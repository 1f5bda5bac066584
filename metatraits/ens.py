import logging
import re
from functools import partial

from web3 import Web3

from .base import ID_TRAIT_TYPE, TRAITS, make_trait, register
from .numbers import pad, special_properties

logger = logging.getLogger(__name__)

ENS_COLLECTION_SIZES = {
    '999club': 1_000,
    'ens': 10_000,
    '100kclub': 100_000,
}
ENS_COLLECTIONS = tuple(ENS_COLLECTION_SIZES)

ENS_NAME = re.compile(r'(\d+)\.eth')


class NumericIdError(ValueError):
    pass


def is_ens_collection(collection: str) -> bool:
    return collection in ENS_COLLECTION_SIZES


def id_digits(collection: str) -> int:
    return len(str(ENS_COLLECTION_SIZES[collection])) - 1


def keccak_decimal(text: str) -> str:
    return str(int.from_bytes(bytes(Web3.keccak(text=text)), 'big'))


def token_id_for(number: int, digits: int) -> str:
    return keccak_decimal(pad(number, digits))


def build_id_lookup(digits: int) -> dict:
    return {token_id_for(i, digits): i for i in range(10 ** digits)}


def find_id_trait(traits):
    return next((t for t in traits if t['typeValue'] == ID_TRAIT_TYPE and t.get('displayType') == 'number'),
                None)


def parse_number(value, nft_id=None) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        owner = f' of NFT {nft_id}' if nft_id is not None else ''
        raise NumericIdError(f'ID trait value {value!r}{owner} is not a number')


def find_number(nft, collection: str, lookups=None) -> int:
    trait = find_id_trait(nft['traits'])
    if trait is not None:
        return parse_number(trait['value'], nft.get('id'))
    match = ENS_NAME.fullmatch(str(nft.get('name') or ''))
    if match:
        return int(match.group(1))
    digits = id_digits(collection)
    if lookups is None:
        lookups = {}
    if digits not in lookups:
        lookups[digits] = build_id_lookup(digits)
    lookup = lookups[digits]
    token_id = str(nft['id'])
    if token_id not in lookup:
        raise NumericIdError(f'No {digits} digit number hashes to token id {token_id} in {collection}')
    logger.debug(f'Reconstructed {lookup[token_id]} from token id {token_id}')
    return lookup[token_id]


def id_trait(number: int) -> dict:
    return make_trait(ID_TRAIT_TYPE, number, category=TRAITS, display_type='number')


def ens_meta(traits, collection: str):
    trait = find_id_trait(traits)
    if trait is None:
        raise NumericIdError(f"{collection} needs a trait with a displayType of 'number' "
                             f'and a typeValue of {ID_TRAIT_TYPE}')
    number = parse_number(trait['value'])
    return [make_trait('Special', name) for name in special_properties(number, id_digits(collection))]


for collection in ENS_COLLECTIONS:
    register(collection)(partial(ens_meta, collection=collection))
