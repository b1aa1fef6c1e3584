import random
import re

import pytest

from finaltake.services.usernames import explain_username, generate_movie_usernames

USERNAME = re.compile(r"^[A-Z][a-z]+[A-Z][a-z]+\d{2}$")


def test_generates_four_unique_names_by_default():
    names = generate_movie_usernames(rng=random.Random(7))
    assert len(names) == 4
    assert len(set(names)) == 4
    assert all(USERNAME.match(n) for n in names)


def test_seeded_generation_is_repeatable():
    assert generate_movie_usernames(6, random.Random(1)) == generate_movie_usernames(6, random.Random(1))


def test_number_suffix_is_two_digits():
    for name in generate_movie_usernames(50, random.Random(3)):
        assert 10 <= int(name[-2:]) <= 99


def test_impossible_count_is_rejected():
    with pytest.raises(ValueError):
        generate_movie_usernames(10_000_000)


@pytest.mark.parametrize("username, hint", [
    ("KubrickFrame42", "Film reference + Production term"),
    ("NolanFan10", "Movie reference + Cinema enthusiast"),
    ("NeonVision55", "Cinema-inspired + Film industry term"),
    ("ZorgFrame12", "Movie-themed username"),
    ("not a username", "Movie-themed username"),
])
def test_explain_username(username, hint):
    assert explain_username(username) == hint
