from pixelpond.core.rng import RNG


def test_same_seed_same_stream():
    a, b = RNG(seed=99), RNG(seed=99)
    assert [a.random() for _ in range(5)] == [b.random() for _ in range(5)]
    assert [a.randint(1, 6) for _ in range(5)] == [b.randint(1, 6) for _ in range(5)]


def test_scripted_draws_come_first():
    rng = RNG.scripted(randoms=[0.25, 0.75], ints=[4])
    assert rng.random() == 0.25
    assert rng.randint(1, 100) == 4
    assert rng.random() == 0.75
    # seeded stream afterwards
    assert 0.0 <= rng.random() < 1.0
    assert 1 <= rng.randint(1, 3) <= 3


def test_uniform_uses_scripted_floats():
    rng = RNG.scripted(randoms=[0.0, 0.5])
    assert rng.uniform(1.0, 6.0) == 1.0
    assert rng.uniform(1.0, 6.0) == 3.5
    for _ in range(100):
        assert 2.0 <= rng.uniform(2.0, 3.0) <= 3.0
