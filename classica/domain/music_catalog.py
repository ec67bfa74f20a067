"""Listening-test reference catalog and per-tier track selection."""

import random

from classica.domain.entities.onboarding import TIERS, MusicTrack, Tier


def _track(id: int, tier: Tier, title: str, composer: str) -> MusicTrack:
    return MusicTrack(
        id=id,
        file=f"/music/Track_{id:02d}.mp3",
        tier=tier,
        title=title,
        composer=composer,
    )


MUSIC_CATALOG: tuple[MusicTrack, ...] = (
    # Easy listening: approachable classics
    _track(1, "easy", "Air on the G String", "J.S. Bach"),
    _track(2, "easy", "Moonlight Sonata (1st Movement)", "Beethoven"),
    _track(3, "easy", "Eine Kleine Nachtmusik", "Mozart"),
    _track(4, "easy", "Canon in D", "Pachelbel"),
    _track(5, "easy", "Clair de Lune", "Debussy"),
    _track(6, "easy", "Für Elise", "Beethoven"),
    _track(7, "easy", "Spring (Four Seasons)", "Vivaldi"),
    _track(8, "easy", "Gymnopédie No. 1", "Satie"),
    _track(9, "easy", "Prelude in C Major", "J.S. Bach"),
    _track(10, "easy", "Ode to Joy", "Beethoven"),
    # Medium listening: more emotional depth
    _track(11, "medium", "Waltz No. 2", "Shostakovich"),
    _track(12, "medium", "Nocturne Op. 9 No. 2", "Chopin"),
    _track(13, "medium", "Swan Lake Theme", "Tchaikovsky"),
    _track(14, "medium", "Pathétique Sonata", "Beethoven"),
    _track(15, "medium", "String Quartet No. 8", "Shostakovich"),
    _track(16, "medium", "Piano Concerto No. 2", "Rachmaninoff"),
    _track(17, "medium", "Ballade No. 1", "Chopin"),
    _track(18, "medium", "1812 Overture", "Tchaikovsky"),
    _track(19, "medium", "Piano Concerto No. 1", "Tchaikovsky"),
    _track(20, "medium", "Fantasie-Impromptu", "Chopin"),
    # Harder listening: complex but beautiful
    _track(21, "hard", "Also sprach Zarathustra", "R. Strauss"),
    _track(22, "hard", "Der Rosenkavalier Suite", "R. Strauss"),
    _track(23, "hard", "Adagietto (Symphony No. 5)", "Mahler"),
    _track(24, "hard", "Till Eulenspiegel", "R. Strauss"),
    _track(25, "hard", "Ride of the Valkyries", "Wagner"),
    _track(26, "hard", "Don Juan", "R. Strauss"),
    _track(27, "hard", "Symphony No. 2 (Finale)", "Mahler"),
    _track(28, "hard", "Ein Heldenleben", "R. Strauss"),
    _track(29, "hard", "Tristan und Isolde (Prelude)", "Wagner"),
    _track(30, "hard", "Four Last Songs", "R. Strauss"),
    _track(31, "hard", "Das Lied von der Erde", "Mahler"),
)


def tracks_for_tier(tier: Tier, catalog: tuple[MusicTrack, ...] = MUSIC_CATALOG) -> list[MusicTrack]:
    """All catalog tracks of one tier, in catalog order."""
    return [track for track in catalog if track.tier == tier]


def pick_tracks_per_tier(
    rng: random.Random | None = None,
    catalog: tuple[MusicTrack, ...] = MUSIC_CATALOG,
) -> list[MusicTrack]:
    """Draw one track per tier uniformly at random, ordered easy, medium, hard."""
    rng = rng or random.Random()
    picked = []
    for tier in TIERS:
        candidates = tracks_for_tier(tier, catalog)
        if not candidates:
            raise ValueError(f"Catalog has no {tier} tracks")
        picked.append(rng.choice(candidates))
    return picked
