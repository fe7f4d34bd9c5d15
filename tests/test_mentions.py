"""Tests for mention collection and resolution."""

from chatmark import tokenize
from chatmark.mentions import (
    DictMentionResolver,
    MentionRef,
    ResolvedMention,
    collect_mentions,
)
from chatmark.tokens import MentionType, UserMention


class TestMentionRef:
    def test_keys(self) -> None:
        assert MentionRef(MentionType.DISCORD, "123").key == "discord:123"
        assert MentionRef(MentionType.CLERK, "abc").key == "clerk:abc"

    def test_from_token(self) -> None:
        token = UserMention("<@n:abc>", MentionType.CLERK, "abc")
        assert MentionRef.from_token(token) == MentionRef(MentionType.CLERK, "abc")


class TestCollectMentions:
    def test_first_seen_order_without_duplicates(self) -> None:
        tokens = tokenize("<@2> <@n:x> <@1> <@2> <@n:x>")
        assert collect_mentions(tokens) == [
            MentionRef(MentionType.DISCORD, "2"),
            MentionRef(MentionType.CLERK, "x"),
            MentionRef(MentionType.DISCORD, "1"),
        ]

    def test_same_id_different_type_is_distinct(self) -> None:
        refs = collect_mentions(tokenize("<@abc><@n:abc>"))
        assert len(refs) == 2

    def test_no_mentions(self) -> None:
        assert collect_mentions(tokenize("hello **world**")) == []

    def test_mentions_inside_code_are_ignored(self) -> None:
        assert collect_mentions(tokenize("`<@1>`")) == []


class TestDictMentionResolver:
    def test_resolves_known_and_unknown(self) -> None:
        ada = ResolvedMention("u1", "ada", tier="gold")
        resolver = DictMentionResolver({"discord:42": ada})
        refs = [MentionRef(MentionType.DISCORD, "42"), MentionRef(MentionType.CLERK, "42")]
        assert resolver.resolve(refs) == [ada, None]

    def test_add(self) -> None:
        resolver = DictMentionResolver()
        ref = MentionRef(MentionType.CLERK, "abc")
        resolver.add(ref, ResolvedMention("u2", "bob"))
        assert resolver.resolve([ref]) == [ResolvedMention("u2", "bob")]

    def test_does_not_alias_input_mapping(self) -> None:
        users: dict[str, ResolvedMention] = {}
        resolver = DictMentionResolver(users)
        resolver.add(MentionRef(MentionType.DISCORD, "1"), ResolvedMention("u", "n"))
        assert users == {}
