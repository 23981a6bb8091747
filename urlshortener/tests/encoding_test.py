import pytest

from urlshortener.utils.encoding import ALPHABET, generate_short_code


def test_alphabet_is_url_safe():
    assert len(ALPHABET) == 64
    assert len(set(ALPHABET)) == 64
    assert all(ch.isalnum() or ch in "_-" for ch in ALPHABET)


@pytest.mark.parametrize("length", [1, 7, 12])
def test_generate_short_code_length(length):
    code = generate_short_code(length)
    assert len(code) == length
    assert set(code) <= set(ALPHABET)


def test_generate_short_code_default_length():
    assert len(generate_short_code()) == 7


def test_generate_short_code_rejects_non_positive_length():
    with pytest.raises(ValueError):
        generate_short_code(0)


def test_generate_short_code_is_random():
    assert len({generate_short_code(12) for _ in range(50)}) == 50
