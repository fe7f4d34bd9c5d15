"""Tokenize and render a chat message: zero config."""

from chatmark import render, tokenize

message = "**gg** <:pog:123> see https://cdn.example.com/clip.mp4"
for token in tokenize(message):
    print(token)
print(render(message))
