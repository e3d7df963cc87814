"""Probe options, mapping of raw probe results and probe result helpers."""