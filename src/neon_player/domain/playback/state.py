"""Core models for the playback bounded context."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from neon_player.domain.shared.constants import PlaybackConstants
from neon_player.domain.shared.messages import ErrorMessages
from neon_player.domain.shared.types import (
    NonEmptyStr,
    NonNegativeFloat,
    SongIdInt,
    UnitVolume,
)


class Song(BaseModel):
    """Immutable playlist entry. Two songs are the same song when their ids match."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: SongIdInt
    title: NonEmptyStr
    artist: str = ""
    audio_src: NonEmptyStr = Field(alias="audioSrc")
    cover: str | None = None
    duration: NonNegativeFloat = 0.0

    @property
    def duration_formatted(self) -> str:
        """Format duration as M:SS."""
        minutes, seconds = divmod(int(self.duration), 60)
        return f"{minutes}:{seconds:02d}"

    @property
    def display_title(self) -> str:
        if self.artist:
            return f"{self.artist} - {self.title}"
        return self.title


class PlaybackState(BaseModel):
    """Snapshot of the player. Every transition produces a new instance."""

    model_config = ConfigDict(frozen=True)

    current_song: Song | None = None
    playlist: tuple[Song, ...] = ()
    is_playing: bool = False
    is_muted: bool = False
    volume: UnitVolume = PlaybackConstants.DEFAULT_VOLUME
    current_time: NonNegativeFloat = 0.0
    duration: NonNegativeFloat = 0.0
    repeat: bool = False
    shuffle: bool = False

    @field_validator("playlist")
    @classmethod
    def validate_unique_ids(cls, v: tuple[Song, ...]) -> tuple[Song, ...]:
        seen: set[int] = set()
        duplicates: list[int] = []
        for song in v:
            if song.id in seen:
                duplicates.append(song.id)
            seen.add(song.id)
        if duplicates:
            raise ValueError(ErrorMessages.DUPLICATE_SONG_IDS.format(ids=duplicates))
        return v

    @model_validator(mode="after")
    def validate_current_in_playlist(self) -> PlaybackState:
        if self.current_song is not None and self.playlist:
            if self.index_of(self.current_song) is None:
                raise ValueError(
                    ErrorMessages.CURRENT_SONG_NOT_IN_PLAYLIST.format(song_id=self.current_song.id)
                )
        return self

    @property
    def output_level(self) -> float:
        """Level the device should be driven at."""
        return 0.0 if self.is_muted else self.volume

    @property
    def has_playlist(self) -> bool:
        return bool(self.playlist)

    def index_of(self, song: Song) -> int | None:
        for index, candidate in enumerate(self.playlist):
            if candidate.id == song.id:
                return index
        return None

    def song_changed_from(self, other: PlaybackState) -> bool:
        """Whether the selected song differs from ``other``'s.

        Compared by value, so a reloaded song with the same id but a new
        ``audio_src`` counts as a change and gets re-bound to the device.
        """
        return self.current_song != other.current_song
