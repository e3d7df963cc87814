"""Dataclasses for probe results, diffs, findings, file history, notifications and reports."""