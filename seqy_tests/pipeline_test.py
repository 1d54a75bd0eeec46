import suite
from dgen import from_schema
from seqy import AlreadyIteratedError

assert_that = suite.assert_that
assert_raises = suite.assert_raises

# --- test data generation schemas ---

person_schema = {
    'id': {'_qen_provider': 'sequence'},
    'name': 'first_name',
    'age': ('pyint', {'min_value': 18, 'max_value': 65}),
    'department': {'_qen_provider': 'choice', 'from': ['eng', 'sales', 'hr']},
}

order_schema = {
    'order_id': {'_qen_provider': 'sequence', 'start': 1000},
    'amount': ('pyfloat', {'min_value': 5, 'max_value': 500}),
    'currency': {'_qen_provider': 'literal', 'value': 'EUR'},
}


# --- pipelines over generated data ---

@suite.test("filtered and sorted report over generated people")
def test_people_report():
    people = from_schema(person_schema, seed=7).take(50)
    seniors = people.filter(lambda p: p['age'] > 40).sorted_by(lambda p: p['age'])
    ages = seniors.map(lambda p: p['age']).to.list()
    assert_that(all(age > 40 for age in ages), "only people over forty")
    assert_that(ages == sorted(ages), "ages ascending")
    assert_that(seniors.to.list() == seniors.to.list(), "a generated batch is restartable")


@suite.test("grouping generated people by department")
def test_people_grouping():
    people = from_schema(person_schema, seed=11).take(60)
    groups = people.to.group_by(lambda p: p['department'], lambda p: p['id'])
    assert_that(set(groups) <= {'eng', 'sales', 'hr'}, f"unexpected departments {set(groups)}")
    assert_that(sum(len(ids) for ids in groups.values()) == 60, "every person lands in one group")
    assert_that(people.map(lambda p: p['id']).to.list() == list(range(1, 61)), "sequential ids")


@suite.test("dataframe export of generated people")
def test_people_dataframe():
    frame = from_schema(person_schema, seed=3).take(10).to.df()
    assert_that(frame.shape == (10, 4), f"got shape {frame.shape}")
    assert_that(list(frame.columns) == ['id', 'name', 'age', 'department'], "columns follow the schema")


@suite.test("unbounded stream with filter and take")
def test_stream_filter_take():
    engineers = from_schema(person_schema, seed=5).stream() \
        .filter(lambda p: p['department'] == 'eng') \
        .take(5) \
        .to.list()
    assert_that(len(engineers) == 5, "five engineers found")
    assert_that(all(p['department'] == 'eng' for p in engineers), "only engineers")
    ids = [p['id'] for p in engineers]
    assert_that(ids == sorted(set(ids)), f"ids unique and increasing: {ids}")


@suite.test("a generated stream is once-only")
def test_stream_is_once_only():
    stream = from_schema(order_schema, seed=9).stream()
    assert_that(stream.is_constrained, "streams are single pass")
    first = stream.take(3).to.list()
    assert_that([o['order_id'] for o in first] == [1000, 1001, 1002], "counter starts at 1000")
    assert_that(all(o['currency'] == 'EUR' for o in first), "literal provider")
    assert_raises(AlreadyIteratedError, stream.to.first)


@suite.test("sliding statistics over a stream")
def test_stream_windows():
    windows = from_schema(order_schema, seed=21).stream() \
        .map(lambda o: o['amount']) \
        .windowed(3, 1) \
        .take(4) \
        .to.list()
    assert_that(len(windows) == 4 and all(len(w) == 3 for w in windows), "four full windows")
    for left, right in zip(windows, windows[1:]):
        assert_that(left[1:] == right[:2], "consecutive windows overlap by two")
    averages = from_schema(order_schema, seed=21).stream() \
        .map(lambda o: o['amount']) \
        .windowed(3, 1, transform=lambda w: sum(w) / len(w)) \
        .take(4) \
        .to.list()
    assert_that(all(5 <= avg <= 500 for avg in averages), "moving averages stay in range")


@suite.test("totals per currency with chunked batches")
def test_order_batches():
    orders = from_schema(order_schema, seed=2).take(25)
    batches = orders.chunked(10, lambda batch: round(sum(o['amount'] for o in batch), 2)).to.list()
    assert_that(len(batches) == 3, f"two full batches and a partial one, got {len(batches)}")
    total = orders.stats.sum_by(lambda o: o['amount'])
    assert_that(abs(sum(batches) - total) < 0.1, "batch totals add up")


if __name__ == "__main__":
    suite.run(title="seqy pipelines over generated data test suite")
