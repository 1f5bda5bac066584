from collections import Counter

from .base import NONE_TRAIT, make_trait

PAIRED_TOKENS = {'creatureworld': ('thermal', 'clouds')}


def scrub_value(value, collection: str) -> str:
    scrubbed = str(value)
    if collection == 'mutant-ape-yacht-club':
        # first word is always M1/M2/M3
        scrubbed = ' '.join(scrubbed.split(' ')[1:])
    if collection == 'doodles-official':
        # "Skin - Blue" should match "Shirt - Light Blue"
        scrubbed = scrubbed.lower().replace('light ', '', 1)
    return scrubbed.split(' ')[0].lower()


def get_trait_matches(traits, collection: str) -> Counter:
    matches = Counter()
    paired = PAIRED_TOKENS.get(collection, ())
    for trait in traits:
        if str(trait['value']) == NONE_TRAIT:
            continue
        token = scrub_value(trait['value'], collection)
        if not token:
            continue
        if token not in matches and token in paired:
            # these values always come in twos, so the first one is not a match
            matches[token] = 0
            continue
        matches[token] += 1
    return matches


def match_traits(traits, collection: str) -> list:
    return [make_trait('Matches', f'{count} - {token}')
            for token, count in get_trait_matches(traits, collection).items() if count > 1]
