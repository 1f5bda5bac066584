TRAITS = 'Traits'
META = 'Meta'
NONE = 'None'

TRAIT_COUNT = 'Trait Count'
ID_TRAIT_TYPE = 'ID'
NONE_TRAIT = 'None'

# collection slug -> fn(traits) -> list of extra meta traits
META_FUNCTIONS = {}


def register(*collections):
    def decorator(fn):
        for collection in collections:
            META_FUNCTIONS[collection] = fn
        return fn
    return decorator


def make_trait(type_value: str, value, category: str = META, display_type=None) -> dict:
    return {'typeValue': type_value, 'value': str(value), 'category': category, 'displayType': display_type}
