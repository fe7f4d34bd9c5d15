"""Resolve mentions against a user directory and render a preview.

The resolver is called once per message with every distinct mention.
"""

from collections.abc import Sequence

from chatmark import FormatConfig, MessageFormatter, PlainTextRenderer, ResolvedMention
from chatmark.mentions import MentionRef

DIRECTORY = {
    "discord:81": ResolvedMention("u_81", "ada", tier="supporter"),
    "clerk:user_2x": ResolvedMention("u_2x", "grace"),
}


class DirectoryResolver:
    def resolve(self, refs: Sequence[MentionRef]) -> list[ResolvedMention | None]:
        print(f"looking up {[ref.key for ref in refs]}")
        return [DIRECTORY.get(ref.key) for ref in refs]


fmt = MessageFormatter(
    config=FormatConfig(highlight=True, open_links_in_new_tab=False),
    resolver=DirectoryResolver(),
)

message = "hey <@81> and <@n:user_2x>, ping <@404>\n```py\nprint('hi')\n```"
print(fmt(message))
print(PlainTextRenderer().render(fmt.tokenize(message)))
