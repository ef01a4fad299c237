import unittest

from bson import ObjectId

from mongobuilder import QueryState, QueryCompiler, BuilderSettings, compile_query
from mongobuilder.handlers import *
from mongobuilder.exc import InvalidQueryError, ConversionError


class HandlersTest(unittest.TestCase):
    """ Test individual handlers """

    longMessage = True
    maxDiff = None

    def setUp(self):
        self.settings = BuilderSettings()
        self.state = QueryState()

    def test_projection(self):
        project = MongoProject(self.settings)

        # === Test: empty: no option at all
        self.assertEqual(project.compile_options(self.state), {})

        # === Test: array
        project.input(self.state, ['a', 'b'])
        self.assertEqual(project.compile_options(self.state), {'projection': {'a': 1, 'b': 1}})

        # === Test: string; replaces, not adds
        project.input(self.state, 'c d')
        self.assertEqual(self.state.projection, ['c', 'd'])
        self.assertEqual(project.compile_options(self.state), {'projection': {'c': 1, 'd': 1}})

        # === Test: duplicates are dropped, the order is kept
        project.input(self.state, ['b', 'a', 'b'])
        self.assertEqual(self.state.projection, ['b', 'a'])

        # === Test: None resets
        project.input(self.state, None)
        self.assertEqual(project.compile_options(self.state), {})

        # === Test: errors
        with self.assertRaises(InvalidQueryError):
            project.input(self.state, {'a': 1})
        with self.assertRaises(InvalidQueryError):
            project.input(self.state, ['a', 1])
        with self.assertRaises(InvalidQueryError):
            project.input(self.state, ['a', ''])

    def test_sort(self):
        sort = MongoSort(self.settings)

        # === Test: no sort: no key at all
        self.assertNotIn('sort', sort.compile_options(self.state))

        # === Test: one key
        sort.input(self.state, 'title', -1)
        self.assertEqual(sort.compile_options(self.state), {'sort': [('title', -1)]})

        # === Test: the last one wins
        sort.input(self.state, 'age')
        self.assertEqual(sort.compile_options(self.state), {'sort': [('age', 1)]})

        # === Test: the direction is used as is
        sort.input(self.state, 'age', 2)
        self.assertEqual(sort.compile_options(self.state), {'sort': [('age', 2)]})

        # === Test: errors
        with self.assertRaises(InvalidQueryError):
            sort.input(self.state, 'age', 0)
        with self.assertRaises(InvalidQueryError):
            sort.input(self.state, 'age', '-')
        with self.assertRaises(InvalidQueryError):
            sort.input(self.state, 'age', True)
        with self.assertRaises(InvalidQueryError):
            sort.input(self.state, None, 1)

    def test_limit(self):
        limit = MongoLimit(self.settings)

        # === Test: nothing
        self.assertEqual(limit.compile_options(self.state), {})

        # === Test: skip & limit are independent
        limit.input(self.state, skip=10)
        self.assertEqual(limit.compile_options(self.state), {'skip': 10})
        limit.input(self.state, limit=5)
        self.assertEqual(limit.compile_options(self.state), {'skip': 10, 'limit': 5})

        # === Test: zero is a value
        limit.input(self.state, skip=0, limit=0)
        self.assertEqual(limit.compile_options(self.state), {'skip': 0, 'limit': 0})

        # === Test: errors
        with self.assertRaises(InvalidQueryError):
            limit.input(self.state, skip=-1)
        with self.assertRaises(InvalidQueryError):
            limit.input(self.state, limit='10')
        with self.assertRaises(InvalidQueryError):
            limit.input(self.state, limit=1.5)

    def test_limit_max_items(self):
        limit = MongoLimit(BuilderSettings(max_items=100))

        # === Test: forced onto a query without a limit
        self.assertEqual(limit.compile_options(self.state), {'limit': 100})

        # === Test: lower limits are fine
        limit.input(self.state, limit=10)
        self.assertEqual(limit.compile_options(self.state), {'limit': 10})

        # === Test: higher limits are clamped
        limit.input(self.state, limit=1000)
        self.assertEqual(limit.compile_options(self.state), {'limit': 100})

        # === Test: counts are not limited
        self.assertEqual(limit.compile_options(self.state, count=True), {'limit': 1000})
        self.state.limit = None
        self.assertEqual(limit.compile_options(self.state, count=True), {})

    def test_filter(self):
        f = MongoFilter(self.settings)

        # === Test: no filters
        self.assertEqual(f.compile_filter(self.state), {})

        # === Test: every comparator
        f.input(self.state, 'a', 'EQ', 'x')
        f.input(self.state, 'b', 'STARTS', 'x')
        f.input(self.state, 'c', 'ENDS', 'x')
        f.input(self.state, 'd', 'CONTAINS', 'x')
        f.input(self.state, 'e', Comparator.STARTS, 'y')
        self.assertEqual(f.compile_filter(self.state), {
            'a': 'x',
            'b': {'$regex': '^x', '$options': 'i'},
            'c': {'$regex': 'x$', '$options': 'i'},
            'd': {'$regex': 'x', '$options': 'i'},
            'e': {'$regex': '^y', '$options': 'i'},
        })

        # === Test: predicates
        self.assertEqual(self.state.filters['a'], Eq('x'))
        self.assertEqual(self.state.filters['b'], StartsWith('x'))
        self.assertEqual(self.state.filters['c'], EndsWith('x'))
        self.assertEqual(self.state.filters['d'], Contains('x'))

    def test_filter_overwrite(self):
        f = MongoFilter(self.settings)

        f.input(self.state, 'a', 'EQ', 'v')
        f.input(self.state, 'a', 'EQ', 'v2')
        self.assertEqual(f.compile_filter(self.state), {'a': 'v2'})

        # A different comparator replaces the condition as well
        f.input(self.state, 'a', 'CONTAINS', 'v3')
        self.assertEqual(f.compile_filter(self.state), {'a': {'$regex': 'v3', '$options': 'i'}})

    def test_filter_unknown_comparator(self):
        f = MongoFilter(self.settings)

        # Falls back to EQ
        f.input(self.state, 'a', 'GTE', 'x')
        f.input(self.state, 'b', 'eq', 1)
        self.assertEqual(self.state.filters['a'], Eq('x'))
        self.assertEqual(f.compile_filter(self.state), {'a': 'x', 'b': 1})
        self.assertIs(Comparator.parse('whatever'), Comparator.EQ)

    def test_filter_patterns_need_strings(self):
        f = MongoFilter(self.settings)

        with self.assertRaises(InvalidQueryError):
            f.input(self.state, 'a', 'STARTS', 1)
        with self.assertRaises(InvalidQueryError):
            f.input(self.state, '', 'EQ', 1)

        # EQ is fine with anything
        f.input(self.state, 'a', 'EQ', 1)
        self.assertEqual(f.compile_filter(self.state), {'a': 1})

    def test_filter_identity(self):
        f = MongoFilter(self.settings)
        oid = ObjectId()

        # === Test: converted on compilation, not on input
        f.input(self.state, '_id', 'EQ', str(oid))
        self.assertEqual(self.state.filters['_id'], Eq(str(oid)))
        self.assertEqual(f.compile_filter(self.state), {'_id': oid})

        # === Test: ObjectId as is
        f.input(self.state, '_id', 'EQ', oid)
        self.assertEqual(f.compile_filter(self.state), {'_id': oid})

        # === Test: not converted for patterns
        f.input(self.state, '_id', 'STARTS', 'abc')
        self.assertEqual(f.compile_filter(self.state), {'_id': {'$regex': '^abc', '$options': 'i'}})

        # === Test: invalid identifier: fails on compilation only
        f.input(self.state, '_id', 'EQ', 'not-an-id')
        with self.assertRaises(ConversionError) as e:
            f.compile_filter(self.state)
        self.assertEqual(e.exception.field, '_id')
        self.assertEqual(e.exception.value, 'not-an-id')

        f.input(self.state, '_id', 'EQ', None)
        with self.assertRaises(ConversionError):
            f.compile_filter(self.state)

    def test_filter_custom_identity(self):
        f = MongoFilter(BuilderSettings(id_field='uid'))
        oid = ObjectId()

        f.input(self.state, 'uid', 'EQ', str(oid))
        f.input(self.state, '_id', 'EQ', 'plain')
        self.assertEqual(f.compile_filter(self.state), {'uid': oid, '_id': 'plain'})

    def test_count(self):
        count = MongoCount(self.settings)

        self.assertEqual(
            count.prepare_options({'projection': {'a': 1}, 'sort': [('a', 1)], 'skip': 1, 'limit': 2}),
            {'skip': 1, 'limit': 2})
        self.assertEqual(count.prepare_options({}), {})

        # limit=0 is "no limit" for find(), and an error for count_documents()
        self.assertEqual(count.prepare_options({'skip': 0, 'limit': 0}), {'skip': 0})


class CompilerTest(unittest.TestCase):
    """ Test QueryCompiler """

    def test_compile(self):
        c = QueryCompiler()
        s = QueryState()

        # === Test: empty state
        self.assertEqual(c.compile(s), ({}, {}))

        # === Test: projection only
        c.handler_project.input(s, ['a', 'b'])
        filter_spec, options = c.compile(s)
        self.assertEqual(filter_spec, {})
        self.assertEqual(options, {'projection': {'a': 1, 'b': 1}})
        self.assertNotIn('sort', options)
        self.assertNotIn('skip', options)
        self.assertNotIn('limit', options)

        # === Test: everything
        c.handler_filter.input(s, 'title', 'STARTS', 'Wid')
        c.handler_filter.input(s, 'price', 'EQ', 5)
        c.handler_sort.input(s, 'title', 1)
        c.handler_limit.input(s, skip=0, limit=5)
        self.assertEqual(c.compile(s), (
            {'title': {'$regex': '^Wid', '$options': 'i'}, 'price': 5},
            {'projection': {'a': 1, 'b': 1}, 'sort': [('title', 1)], 'skip': 0, 'limit': 5},
        ))

        # === Test: count
        self.assertEqual(c.compile_count(s), (
            {'title': {'$regex': '^Wid', '$options': 'i'}, 'price': 5},
            {'skip': 0, 'limit': 5},
        ))

        # === Test: compile() does not modify the state
        self.assertEqual(s.skip, 0)
        self.assertEqual(s.projection, ['a', 'b'])

    def test_compile_query(self):
        s = QueryState()
        s.filters['_id'] = Eq('5f0000000000000000000000')
        s.limit = 10

        self.assertEqual(compile_query(s, dict(max_items=3)), (
            {'_id': ObjectId('5f0000000000000000000000')},
            {'limit': 3},
        ))

    def test_settings(self):
        self.assertEqual(BuilderSettings(), dict(id_field='_id', max_items=None, stringify_ids=True))
        self.assertEqual(BuilderSettings.from_value(dict(max_items=5))['max_items'], 5)

        s = BuilderSettings(max_items=5)
        self.assertIs(BuilderSettings.from_value(s), s)

        with self.assertRaises(TypeError):
            BuilderSettings(unknown=1)
        with self.assertRaises(AssertionError):
            BuilderSettings(max_items=0)
