from .base import make_trait, register

DEATHBATS_ONE_OF_ONES = ('Brooks Wackerman', 'Johnny Christ', 'M. Shadows', 'Synyster Gates',
                         'Zacky Vengence', 'Zacky Vengeance', 'Shadows')


def find_trait(traits, type_value: str):
    return next((t for t in traits if t['typeValue'] == type_value), None)


@register('creatureworld')
def creatureworld(traits):
    bg = find_trait(traits, 'Background')
    creature = find_trait(traits, 'Creature')
    if bg and creature and bg['value'] == creature['value']:
        return [make_trait('Creature Background Match', 'true')]
    return []


@register('deathbats-club')
def deathbats(traits):
    for trait in traits:
        if trait['typeValue'] in DEATHBATS_ONE_OF_ONES:
            return [make_trait('1 of 1', trait['typeValue'])]
    return []


@register('mutant-ape-yacht-club')
def mutant_apes(traits):
    if not traits:
        return []
    first = str(traits[0]['value'])
    for mutant_type in ('M1', 'M2'):
        if mutant_type in first:
            return [make_trait('Mutant Type', mutant_type)]
    return [make_trait('Mutant Type', 'M3')]
