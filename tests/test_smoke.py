from distort.config import ARENA


def test_import_package():
    import distort

    assert distort.__version__


def test_arena_grid_dimensions():
    assert ARENA.grid_columns == 768 // 32 + 2 + 1
    assert ARENA.grid_rows == 608 // 32 + 2 + 1
    assert ARENA.max_grid_displacement == 128.0
