"""Web front-ends for the rhyme finder."""
