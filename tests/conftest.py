import pytest

from support import RowGenerator


@pytest.fixture(scope='function')
def row_generator():
    return RowGenerator()
