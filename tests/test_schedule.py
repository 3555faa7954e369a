from courtdesk.services.schedule import decode_schedule, default_schedule, encode_schedule, is_open


def test_default_schedule_opens_nine_to_eleven_pm():
    grid = default_schedule()

    assert len(grid) == 7
    assert all(len(day) == 24 for day in grid)
    assert grid[0][8] is False
    assert grid[0][9] is True
    assert grid[6][23] is True


def test_encode_uses_day_keys():
    encoded = encode_schedule(default_schedule())

    assert sorted(encoded) == [f"day{i}" for i in range(7)]
    assert decode_schedule(encoded) == default_schedule()


def test_missing_day_decodes_to_closed_row():
    encoded = encode_schedule(default_schedule())
    del encoded["day3"]

    grid = decode_schedule(encoded)

    assert len(grid) == 7
    assert grid[3] == [False] * 24
    assert grid[2] == default_schedule()[2]


def test_missing_day_default_can_be_open():
    grid = decode_schedule({}, missing_day_default=True)

    assert grid == [[True] * 24 for _ in range(7)]


def test_short_rows_are_padded():
    grid = decode_schedule({f"day{i}": [True] * 10 for i in range(7)})

    assert all(len(day) == 24 for day in grid)
    assert grid[0][9] is True
    assert grid[0][10] is False


def test_is_open_reads_grid():
    grid = default_schedule()
    grid[1][15] = False

    assert is_open(grid, 1, 14) is True
    assert is_open(grid, 1, 15) is False
    assert is_open(grid, 1, 3) is False


def test_is_open_fails_open_without_row():
    assert is_open([], 4, 12) is True
    assert is_open(None, 0, 0) is True
    assert is_open([[False] * 24] * 3, 5, 12) is True
    assert is_open([[False] * 12] * 7, 0, 20) is True
