"""Mirror Scala Improvement Proposal states into the docs.scala-lang sources."""

__version__ = "0.1.0"
