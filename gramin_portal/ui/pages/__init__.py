"""Portal pages, one class per screen."""
