import random

import pytest

from tests.factories import nft, trait


@pytest.fixture
def ab_collection():
    # 9 nfts with Background A, 1 with Background B
    return [nft(i, [trait('Background', 'B' if i == 9 else 'A')]) for i in range(10)]


@pytest.fixture
def collection():
    rng = random.Random(7)
    nfts = []
    for i in range(50):
        traits = [trait('Background', rng.choice(['Red', 'Teal', 'Gold', 'Sand', 'Night']))]
        if rng.random() < 0.6:
            traits.append(trait('Hat', rng.choice(['Cap', 'Crown', 'Beanie'])))
        if rng.random() < 0.9:
            traits.append(trait('Eyes', rng.choice(['Red Laser', 'Sleepy', 'Wide'])))
        nfts.append(nft(i, traits))
    return nfts
