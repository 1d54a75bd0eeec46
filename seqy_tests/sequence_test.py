import itertools
import suite
from seqy import (
    from_list, sequence_of, empty, generate, from_range, repeat, iterate, from_iterator,
    IndexedValue, ConstructionError, TypeMismatchError
)

assert_that = suite.assert_that
assert_raises = suite.assert_raises
PullCounter = suite.PullCounter


# laziness and restartability

@suite.test("composing a chain runs nothing")
def test_composition_is_lazy():
    calls = []
    chain = from_list([1, 2, 3]).map(lambda x: calls.append(x) or x).filter(lambda x: x > 1)
    assert_that(calls == [], f"nothing should be evaluated yet, got {calls}")
    assert_that(chain.to.list() == [2, 3], "chain should evaluate on consumption")


@suite.test("a chain over a restartable source can be consumed repeatedly")
def test_restartable_chain():
    chain = from_list([1, 2, 3]).map(lambda x: x * 2).filter(lambda x: x > 2)
    assert_that(chain.to.list() == [4, 6], "first pass")
    assert_that(chain.to.list() == [4, 6], "second pass must match")
    assert_that(list(chain) == [4, 6], "sequences are python iterables")


@suite.test("generate calls its factory once per cursor")
def test_generate_restarts():
    calls = []

    def factory():
        calls.append(1)
        return (i for i in range(3))

    numbers = generate(factory)
    assert_that(numbers.to.list() == [0, 1, 2], "first pass")
    assert_that(numbers.to.list() == [0, 1, 2], "second pass")
    assert_that(len(calls) == 2, f"factory should run twice, ran {len(calls)} times")


@suite.test("generate rejects a factory that returns a non-iterable")
def test_generate_requires_iterable():
    assert_raises(TypeMismatchError, lambda: generate(lambda: 42).to.list())


@suite.test("factories build the expected elements")
def test_factories():
    assert_that(empty().to.list() == [], "empty")
    assert_that(sequence_of('a', 'b').to.list() == ['a', 'b'], "sequence_of")
    assert_that(from_range(3, 4).to.list() == [3, 4, 5, 6], "from_range")
    assert_that(repeat(7, 3).to.list() == [7, 7, 7], "finite repeat")
    assert_that(repeat('x').take(2).to.list() == ['x', 'x'], "unbounded repeat")
    assert_that(iterate(1, lambda x: x * 2).take(5).to.list() == [1, 2, 4, 8, 16], "iterate")
    assert_raises(ConstructionError, lambda: from_range(0, -1))
    assert_raises(ConstructionError, lambda: repeat(1, -1))


@suite.test("from_list snapshots its input")
def test_from_list_snapshot():
    data = [1, 2]
    numbers = from_list(data)
    data.append(3)
    assert_that(numbers.to.list() == [1, 2], "later changes to the input must not leak in")


# filtering and mapping

@suite.test("filter family")
def test_filters():
    numbers = from_range(1, 6)
    assert_that(numbers.filter(lambda x: x % 2 == 0).to.list() == [2, 4, 6], "filter")
    assert_that(numbers.filter_not(lambda x: x % 2 == 0).to.list() == [1, 3, 5], "filter_not")
    mixed = sequence_of(1, 'a', 2.5, None, True)
    assert_that(mixed.filter_is_instance(str).to.list() == ['a'], "filter_is_instance")


@suite.test("filter_indexed sees upstream positions")
def test_filter_indexed():
    letters = sequence_of('a', 'b', 'c', 'd')
    assert_that(letters.filter_indexed(lambda e, i: i % 2 == 0).to.list() == ['a', 'c'], "even positions")

    # the index counts the direct upstream, i.e. the output of the first filter
    chained = from_list([10, 11, 12, 13]).filter(lambda x: x != 10).filter_indexed(lambda e, i: i == 1)
    assert_that(chained.to.list() == [12], f"got {chained.to.list()}")


@suite.test("map, map_indexed and with_index")
def test_maps():
    assert_that(sequence_of(1, 2).map(str).to.list() == ['1', '2'], "map")
    indexed = sequence_of('a', 'b').map_indexed(lambda e, i: f"{i}:{e}")
    assert_that(indexed.to.list() == ['0:a', '1:b'], "map_indexed")
    pairs = sequence_of('x', 'y').with_index().to.list()
    assert_that(pairs == [IndexedValue(0, 'x'), IndexedValue(1, 'y')], "with_index")
    assert_that(pairs[1].index == 1 and pairs[1].value == 'y', "indexed values have named fields")


@suite.test("on_each observes elements only as they are pulled")
def test_on_each():
    seen = []
    observed = from_list([1, 2, 3]).on_each(seen.append)
    assert_that(seen == [], "nothing observed before consumption")
    assert_that(observed.take(2).to.list() == [1, 2], "elements pass through unchanged")
    assert_that(seen == [1, 2], f"only pulled elements are observed, got {seen}")


@suite.test("flatten and flat_map")
def test_flatten():
    nested = sequence_of([1, 2], [], (3,), 'ab')
    assert_that(nested.flatten().to.list() == [1, 2, 3, 'a', 'b'], "flatten")
    assert_that(sequence_of('a b', 'c').flat_map(str.split).to.list() == ['a', 'b', 'c'], "flat_map")
    repeated = sequence_of(2, 1).flat_map_indexed(lambda e, i: [i] * e)
    assert_that(repeated.to.list() == [0, 0, 1], "flat_map_indexed")


@suite.test("flatten rejects non-iterable elements")
def test_flatten_type_mismatch():
    error = assert_raises(TypeMismatchError, lambda: sequence_of([1], 2).flatten().to.list())
    assert_that(isinstance(error, TypeError), "type mismatch is a TypeError")
    assert_that('int' in str(error), f"message should name the offending type: {error}")


@suite.test("flat_map over an unbounded source stays lazy")
def test_flat_map_unbounded():
    firsts = iterate(1, lambda x: x + 1).flat_map(lambda x: [x, -x]).take(4)
    assert_that(firsts.to.list() == [1, -1, 2, -2], f"got {firsts.to.list()}")


# slicing

@suite.test("take never pulls past the last element taken")
def test_take_is_lazy():
    counter = PullCounter(itertools.count())
    assert_that(from_iterator(counter).take(5).to.list() == [0, 1, 2, 3, 4], "first five")
    assert_that(counter.pulled == 5, f"should pull exactly five, pulled {counter.pulled}")


@suite.test("take(0) pulls nothing")
def test_take_zero():
    counter = PullCounter(itertools.count())
    assert_that(from_iterator(counter).take(0).to.list() == [], "nothing taken")
    assert_that(counter.pulled == 0, f"nothing should be pulled, pulled {counter.pulled}")


@suite.test("negative counts are rejected at construction")
def test_negative_counts():
    numbers = from_range(0, 3)
    error = assert_raises(ConstructionError, lambda: numbers.take(-1))
    assert_that(error.parameters == ('count',), f"should name the count, got {error.parameters}")
    assert_that(isinstance(error, ValueError), "construction errors are ValueErrors")
    assert_raises(ConstructionError, lambda: numbers.drop(-2))


@suite.test("drop then take matches python slicing")
def test_drop_take_slices():
    data = list(range(7))
    numbers = from_list(data)
    for n in range(9):
        for m in (0, 1, 3, 8):
            got = numbers.drop(n).take(m).to.list()
            assert_that(got == data[n:n + m], f"drop({n}).take({m}) gave {got}")


@suite.test("stacked take and drop fold into one slice")
def test_slice_folding():
    numbers = from_range(0, 10)
    assert_that(numbers.drop(2).take(3).drop(1).to.list() == [3, 4], "drop/take/drop")
    assert_that(numbers.take(5).take(10).to.list() == [0, 1, 2, 3, 4], "take cannot widen")
    assert_that(numbers.take(3).drop(5).to.list() == [], "drop past the end of a take")
    assert_that(numbers.drop(0) is numbers, "drop(0) is the same sequence")


@suite.test("slice bounds")
def test_slice():
    numbers = from_range(0, 6)
    assert_that(numbers.slice(2, 4).to.list() == [2, 3], "slice(2, 4)")
    assert_that(numbers.slice(4).to.list() == [4, 5], "open ended slice")
    assert_that(assert_raises(ConstructionError, lambda: numbers.slice(-1)).parameters == ('start',), "start")
    assert_that(assert_raises(ConstructionError, lambda: numbers.slice(3, 1)).parameters == ('stop',), "stop")


@suite.test("take_while stops at the first failing element")
def test_take_while():
    counter = PullCounter(itertools.count())
    assert_that(from_iterator(counter).take_while(lambda x: x < 3).to.list() == [0, 1, 2], "prefix")
    assert_that(counter.pulled == 4, f"one extra pull decides the end, pulled {counter.pulled}")
    assert_that(sequence_of(5, 1).take_while(lambda x: x < 3).to.list() == [], "failing first element")


@suite.test("drop_while drops only the leading run")
def test_drop_while():
    assert_that(sequence_of(1, 2, 5, 1, 6).drop_while(lambda x: x < 3).to.list() == [5, 1, 6], "leading run")
    assert_that(sequence_of(1, 2).drop_while(lambda x: x < 3).to.list() == [], "everything dropped")


# combining

@suite.test("zip stops at the shorter side")
def test_zip():
    letters = sequence_of('a', 'b')
    assert_that(sequence_of(1, 2, 3).zip(letters).to.list() == [(1, 'a'), (2, 'b')], "pairs")
    assert_that(sequence_of(1, 2).zip(letters, lambda n, s: s * n).to.list() == ['a', 'bb'], "transform")
    unbounded = iterate(1, lambda x: x + 1).zip(letters)
    assert_that(unbounded.to.list() == [(1, 'a'), (2, 'b')], "an unbounded left side still ends")


@suite.test("zip_with_next pairs neighbours")
def test_zip_with_next():
    gaps = sequence_of(1, 2, 4, 7).zip_with_next(lambda a, b: b - a)
    assert_that(gaps.to.list() == [1, 2, 3], "differences")
    assert_that(sequence_of(1, 2, 3).zip_with_next().to.list() == [(1, 2), (2, 3)], "default pairs")
    assert_that(sequence_of(1).zip_with_next().to.list() == [], "single element")
    assert_that(empty().zip_with_next().to.list() == [], "empty")


@suite.test("plus appends another sequence")
def test_plus():
    joined = sequence_of(1, 2).plus(sequence_of(3))
    assert_that(joined.to.list() == [1, 2, 3], "first pass")
    assert_that(joined.to.list() == [1, 2, 3], "second pass")
    assert_that(empty().plus(empty()).to.list() == [], "empty plus empty")


@suite.test("minus removes equal elements")
def test_minus():
    assert_that(sequence_of(1, 2, 3, 2, 4).minus(sequence_of(2, 4)).to.list() == [1, 3], "numbers")
    assert_that(sequence_of([1], [2]).minus(sequence_of([2])).to.list() == [[1]], "unhashable elements")
    assert_that(sequence_of(1, 2).minus(empty()).to.list() == [1, 2], "nothing to remove")


@suite.test("if_empty only calls the supplier for an empty upstream")
def test_if_empty():
    calls = []

    def supplier():
        calls.append(1)
        return sequence_of(9, 8)

    assert_that(empty().if_empty(supplier).to.list() == [9, 8], "fallback used")
    assert_that(sequence_of(1).if_empty(supplier).to.list() == [1], "upstream kept")
    assert_that(len(calls) == 1, f"supplier should run once, ran {len(calls)} times")


@suite.test("unbounded source through filter and take")
def test_unbounded_pipeline():
    powers = iterate(1, lambda x: x * 2).filter(lambda x: x > 10).take(3)
    assert_that(powers.to.list() == [16, 32, 64], f"got {powers.to.list()}")


if __name__ == "__main__":
    suite.run(title="seqy stateless stages test suite")
