# Copyright 2021-present Kensho Technologies, LLC.
import asyncio
from inspect import CORO_CLOSED, getcoroutinestate
from typing import Any, Callable, List
import unittest

from graphql.language.parser import parse

from ..execution import ExecutionResult, execute, execute_async, execute_sync
from ..schema import Field, GraphQLInt, GraphQLString, ListType, NonNullType, ObjectType, Schema
from .test_helpers import (
    execute_query,
    execute_query_async,
    get_error_messages,
    get_error_paths,
)


async def _get_later(value: Any, delay: float = 0) -> Any:
    await asyncio.sleep(delay)
    return value


def _make_logging_resolver(log: List[str], name: str, delay: float) -> Callable[..., Any]:
    async def resolve(*_: Any) -> str:
        log.append(f"start {name}")
        await asyncio.sleep(delay)
        log.append(f"end {name}")
        return name

    return resolve


async def _fail_later(*_: Any) -> Any:
    await asyncio.sleep(0)
    raise ValueError("Async failure.")


ChildType = ObjectType(
    "Child",
    {
        "ok": Field(GraphQLString, resolve=lambda *_: _get_later("ok")),
        "fail": Field(GraphQLString, resolve=_fail_later),
        "non_null_fail": Field(NonNullType(GraphQLString), resolve=_fail_later),
    },
)

AsyncQueryType = ObjectType(
    "Query",
    {
        "sync": Field(GraphQLString, resolve=lambda *_: "sync"),
        "later": Field(GraphQLString, resolve=lambda *_: _get_later("later")),
        "child": Field(ChildType, resolve=lambda *_: _get_later({})),
        "sync_child": Field(ChildType, resolve=lambda *_: {}),
        "non_null_fail": Field(NonNullType(GraphQLString), resolve=_fail_later),
        "numbers": Field(
            ListType(NonNullType(GraphQLInt)),
            resolve=lambda *_: [_get_later(1, 0.02), 2, _get_later(3)],
        ),
        "numbers_with_null": Field(
            ListType(NonNullType(GraphQLInt)),
            resolve=lambda *_: [1, _get_later(None), 3],
        ),
        "children": Field(
            ListType(ChildType), resolve=lambda *_: _get_later([{}, _get_later({})])
        ),
    },
)

ASYNC_SCHEMA = Schema(AsyncQueryType)


class AsyncExecutionTests(unittest.TestCase):
    def test_sync_execution_returns_result_directly(self) -> None:
        result = execute(ASYNC_SCHEMA, parse("{ sync sync_child { __typename } }"))
        self.assertIsInstance(result, ExecutionResult)
        self.assertEqual({"sync": "sync", "sync_child": {"__typename": "Child"}}, result.data)

    def test_async_execution_returns_awaitable(self) -> None:
        awaitable_result = execute(ASYNC_SCHEMA, parse("{ sync later }"))
        self.assertTrue(asyncio.iscoroutine(awaitable_result))

        result = asyncio.run(awaitable_result)
        self.assertEqual({"sync": "sync", "later": "later"}, result.data)
        self.assertEqual([], result.errors)

    def test_execute_async_accepts_sync_schemas(self) -> None:
        result = asyncio.run(execute_async(ASYNC_SCHEMA, parse("{ sync }")))
        self.assertEqual({"sync": "sync"}, result.data)

    def test_execute_sync_rejects_async_resolvers(self) -> None:
        with self.assertRaises(RuntimeError) as context:
            execute_sync(ASYNC_SCHEMA, parse("{ sync later }"))
        self.assertEqual(
            "GraphQL execution failed to complete synchronously.", str(context.exception)
        )

    def test_execute_sync_stops_at_the_first_awaitable_and_closes_it(self) -> None:
        calls: List[str] = []
        coroutines: List[Any] = []

        def resolve_later(*_: Any) -> Any:
            calls.append("later")
            coroutine = _get_later("later")
            coroutines.append(coroutine)
            return coroutine

        def resolve_items(*_: Any) -> Any:
            calls.append("items")
            coroutine = _get_later(2)
            coroutines.append(coroutine)
            return [1, coroutine]

        query_type = ObjectType(
            "Query",
            {
                "first": Field(GraphQLString, resolve=lambda *_: calls.append("first") or "1"),
                "later": Field(GraphQLString, resolve=resolve_later),
                "items": Field(ListType(GraphQLInt), resolve=resolve_items),
                "last": Field(GraphQLString, resolve=lambda *_: calls.append("last") or "2"),
            },
        )
        schema = Schema(query_type)

        for query, expected_calls in (
            ("{ first later last }", ["first", "later"]),
            ("{ first items last }", ["first", "items"]),
        ):
            calls.clear()
            coroutines.clear()
            with self.assertRaises(RuntimeError):
                execute_sync(schema, parse(query))
            self.assertEqual(expected_calls, calls)
            self.assertEqual([CORO_CLOSED], [getcoroutinestate(c) for c in coroutines])

    def test_failing_iterable_closes_the_awaitables_it_yielded(self) -> None:
        coroutines: List[Any] = []

        def resolve_numbers(*_: Any) -> Any:
            def generate_numbers() -> Any:
                coroutine = _get_later(1)
                coroutines.append(coroutine)
                yield coroutine
                raise ValueError("Iteration failed.")

            return generate_numbers()

        query_type = ObjectType(
            "Query", {"numbers": Field(ListType(GraphQLInt), resolve=resolve_numbers)}
        )
        result = execute_query(Schema(query_type), "{ numbers }")

        self.assertEqual({"numbers": None}, result.data)
        self.assertEqual(["Iteration failed."], get_error_messages(result))
        self.assertEqual([CORO_CLOSED], [getcoroutinestate(c) for c in coroutines])

    def test_sibling_fields_run_concurrently_and_keep_their_order(self) -> None:
        log: List[str] = []
        query_type = ObjectType(
            "Query",
            {
                "slow": Field(GraphQLString, resolve=_make_logging_resolver(log, "slow", 0.05)),
                "fast": Field(GraphQLString, resolve=_make_logging_resolver(log, "fast", 0.01)),
                "sync": Field(GraphQLString, resolve=lambda *_: "sync"),
            },
        )
        result = execute_query_async(Schema(query_type), "{ slow fast sync }")

        self.assertEqual({"slow": "slow", "fast": "fast", "sync": "sync"}, result.data)
        self.assertEqual(["slow", "fast", "sync"], list(result.data))
        self.assertEqual(["start slow", "start fast", "end fast", "end slow"], log)

    def test_mutation_fields_run_serially(self) -> None:
        log: List[str] = []
        mutation_type = ObjectType(
            "Mutation",
            {
                "first": Field(GraphQLString, resolve=_make_logging_resolver(log, "first", 0.05)),
                "second": Field(GraphQLString, resolve=lambda *_: log.append("second") or "2"),
                "third": Field(GraphQLString, resolve=_make_logging_resolver(log, "third", 0.01)),
            },
        )
        schema = Schema(ObjectType("Query", {"a": GraphQLInt}), mutation=mutation_type)
        result = execute_query_async(schema, "mutation { first second third }")

        self.assertEqual({"first": "first", "second": "2", "third": "third"}, result.data)
        self.assertEqual(
            ["start first", "end first", "second", "start third", "end third"], log
        )

    def test_async_list_items_keep_their_order(self) -> None:
        result = execute_query_async(ASYNC_SCHEMA, "{ numbers children { ok } }")
        self.assertEqual(
            {"numbers": [1, 2, 3], "children": [{"ok": "ok"}, {"ok": "ok"}]}, result.data
        )

    def test_async_null_item_in_list_of_non_null(self) -> None:
        result = execute_query_async(ASYNC_SCHEMA, "{ numbers_with_null sync }")
        self.assertEqual({"numbers_with_null": None, "sync": "sync"}, result.data)
        self.assertEqual([["numbers_with_null", 1]], get_error_paths(result))

    def test_async_errors(self) -> None:
        result = execute_query_async(
            ASYNC_SCHEMA, "{ child { ok fail } sync_child { ok non_null_fail } later }"
        )
        self.assertEqual(
            {"child": {"ok": "ok", "fail": None}, "sync_child": None, "later": "later"},
            result.data,
        )
        self.assertEqual(["Async failure.", "Async failure."], get_error_messages(result))
        self.assertCountEqual(
            [["child", "fail"], ["sync_child", "non_null_fail"]], get_error_paths(result)
        )

    def test_async_error_in_non_null_root_field(self) -> None:
        result = execute_query_async(ASYNC_SCHEMA, "{ later non_null_fail }")
        self.assertIsNone(result.data)
        self.assertEqual([["non_null_fail"]], get_error_paths(result))

    def test_default_resolver_with_async_methods(self) -> None:
        async def greeting(args: Any, context: Any, _info: Any) -> str:
            await asyncio.sleep(0)
            return f"Hello, {context}!"

        schema = Schema(ObjectType("Query", {"greeting": GraphQLString, "count": GraphQLInt}))
        result = execute_query_async(
            schema,
            "{ greeting count }",
            root_value={"greeting": greeting, "count": 1},
            context_value="world",
        )
        self.assertEqual({"greeting": "Hello, world!", "count": 1}, result.data)
