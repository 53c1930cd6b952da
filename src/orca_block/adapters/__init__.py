"""Serialization adapters for persistence collaborators."""

from .notes_envelope import pack_skeleton_notes, unpack_skeleton_notes

__all__ = ["pack_skeleton_notes", "unpack_skeleton_notes"]
