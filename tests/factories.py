def trait(type_value, value, category='Traits', display_type=None):
    return {'typeValue': type_value, 'value': value, 'category': category, 'displayType': display_type}


def nft(id, traits, collection='test-collection', name=None):
    return {'id': str(id), 'collection': collection, 'name': name or f'#{id}', 'imageUrl': f'https://img/{id}.png',
            'traits': traits}
