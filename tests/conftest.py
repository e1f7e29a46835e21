import pytest

from ffibind.code_generator import TypeRenderer, UniqueNamer


@pytest.fixture
def namer():
    return UniqueNamer()


@pytest.fixture
def renderer():
    return TypeRenderer()
