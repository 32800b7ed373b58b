import pytest

from globalchain.randomness import (
    USIZE_MAX,
    RandomNumberError,
    generate_random_number,
    generate_secure_random_number,
)


@pytest.mark.parametrize("func", [generate_secure_random_number, generate_random_number])
def test_results_stay_in_range(func):
    values = [func(10, 20) for _ in range(200)]
    assert min(values) >= 10
    assert max(values) <= 20


@pytest.mark.parametrize("func", [generate_secure_random_number, generate_random_number])
def test_equal_bounds_return_the_bound(func):
    assert func(42, 42) == 42


def test_small_range_covers_every_value():
    values = {generate_random_number(0, 3) for _ in range(500)}
    assert values == {0, 1, 2, 3}


@pytest.mark.parametrize("func", [generate_secure_random_number, generate_random_number])
def test_min_greater_than_max_raises(func):
    with pytest.raises(RandomNumberError, match="greater than the maximum"):
        func(5, 4)


def test_full_usize_range_is_too_large():
    with pytest.raises(RandomNumberError, match="Range too large"):
        generate_secure_random_number(0, USIZE_MAX)


def test_nearly_full_range_is_accepted():
    value = generate_secure_random_number(1, USIZE_MAX)
    assert 1 <= value <= USIZE_MAX


@pytest.mark.parametrize("bounds", [(-1, 5), (0, USIZE_MAX + 1)])
def test_values_outside_usize_are_rejected(bounds):
    with pytest.raises(RandomNumberError):
        generate_random_number(*bounds)