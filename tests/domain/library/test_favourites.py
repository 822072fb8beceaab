"""Tests for favourite matching and toggling."""

from music_curator.domain.library.favourites import (
    Favourite,
    matches_favourite,
    toggle_favourite,
)
from music_curator.domain.library.models import Tags, Track
from music_curator.domain.tracks.models import (
    IdentifiedTrack,
    Identifiers,
    missing_favourite,
)


def make_track(artist, title, album=None, track_id="t1") -> Track:
    return Track(
        id=track_id,
        source_id="local",
        path=f"{artist}/{title}.mp3",
        tags=Tags(artist=artist, title=title, album=album),
    )


class TestMatchesFavourite:
    """Tests for matches_favourite."""

    def test_exact_match(self):
        """Identical artist and title match."""
        assert matches_favourite(make_track("Bach", "Air"), Favourite("Bach", "Air"))

    def test_case_insensitive(self):
        """Case differences are ignored."""
        assert matches_favourite(make_track("Bach", "Air"), Favourite("bach", "AIR"))

    def test_unicode_lowercasing(self):
        """Non-ASCII letters are lowercased too."""
        track = make_track("Édith Piaf", "LA VIE EN ROSE")
        assert matches_favourite(track, Favourite("édith piaf", "la vie en rose"))

    def test_album_ignored(self):
        """Album does not take part in favourite matching."""
        track = make_track("Bach", "Air", album="Orchestral Suites")
        assert matches_favourite(track, Favourite("Bach", "Air"))

    def test_no_trimming(self):
        """Whitespace is significant."""
        assert not matches_favourite(make_track("Bach", "Air"), Favourite("Bach ", "Air"))

    def test_different_title(self):
        """Different titles do not match."""
        assert not matches_favourite(
            make_track("Bach", "Air"), Favourite("Bach", "Toccata")
        )

    def test_absent_tags_match_empty_strings(self):
        """Absent artist/title are treated as empty strings."""
        track = make_track(None, None)
        assert matches_favourite(track, Favourite("", ""))
        assert not matches_favourite(track, Favourite("Bach", ""))


class TestToggleFavourite:
    """Tests for toggle_favourite."""

    def test_adds_missing_favourite(self):
        """Toggling a non-favourite adds it."""
        identified = IdentifiedTrack(Identifiers(), make_track("Bach", "Air"))
        result = toggle_favourite((), identified)
        assert result == (Favourite("Bach", "Air"),)

    def test_removes_existing_favourite(self):
        """Toggling a favourite removes every case variant of it."""
        favourites = (
            Favourite("bach", "air"),
            Favourite("Mozart", "Requiem"),
            Favourite("BACH", "AIR"),
        )
        identified = IdentifiedTrack(Identifiers(), make_track("Bach", "Air"))
        result = toggle_favourite(favourites, identified)
        assert result == (Favourite("Mozart", "Requiem"),)

    def test_removes_via_placeholder(self):
        """A missing placeholder can be un-favourited."""
        favourite = Favourite("Mozart", "Requiem")
        result = toggle_favourite((favourite,), missing_favourite(favourite))
        assert result == ()

    def test_input_untouched(self):
        """The input tuple is not modified."""
        favourites = (Favourite("Mozart", "Requiem"),)
        identified = IdentifiedTrack(Identifiers(), make_track("Bach", "Air"))
        toggle_favourite(favourites, identified)
        assert favourites == (Favourite("Mozart", "Requiem"),)
