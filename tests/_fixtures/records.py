"""Shared record declarations used across the test suite."""

from __future__ import annotations

LENGTH_DOC = (
    "Length of something I'm not so sure what it's for",
    "This doc string is so long",
    'Here is some code blocks `println!("hello");` you see?:',
)

SIMPLE_MAP_SCHEMA = """
records:
  Simple:
    doc: A simple record
    fields:
      - name: name
        type: String
        doc:
          - Name for simple example
      - name: length
        type: u64
        doc: |
          Length of something I'm not so sure what it's for
          This doc string is so long
          Here is some code blocks `println!("hello");` you see?:
  SimpleMap:
    fields:
      - name: simple
        type: HashMap < String, Simple >
        doc: Map for simple struct
"""
