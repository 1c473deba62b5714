"""
Tests for corpus utilities.

Run with: pytest tests/test_text_utils.py -v
"""

import pytest

from framework.text_utils import (DEFAULT_CORPUS, clean_corpus, get_character_frequencies,
                                  load_text_file, validate_text_input)


def test_clean_corpus():
    assert clean_corpus("Hello, World! 123") == "helloworld"


@pytest.mark.parametrize('text', ['', None, '  ', '42'])
def test_clean_corpus_empty(text):
    assert clean_corpus(text) == ''


def test_default_corpus_letters():
    letters = clean_corpus(DEFAULT_CORPUS)
    assert len(letters) == 851
    assert set(letters) == set('abcdefghijklmnopqrstuvwxyz')


def test_character_frequencies():
    assert get_character_frequencies('aab') == {'a': 2, 'b': 1}
    assert get_character_frequencies('a b b b', normalize=True) == {'a': 0.25, 'b': 0.75}
    assert get_character_frequencies('', normalize=True) == {}


def test_validate_text_input():
    assert validate_text_input('the quick brown fox') == []
    assert validate_text_input('') == ['Text is empty']
    assert any('too short' in issue for issue in validate_text_input('ab'))
    assert any('dominated' in issue for issue in validate_text_input('aaaab'))


def test_load_text_file(tmp_path):
    path = tmp_path / 'corpus.txt'
    path.write_text('some text', encoding='utf-8')
    assert load_text_file(str(path)) == 'some text'


def test_load_missing_text_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_text_file(str(tmp_path / 'missing.txt'))
