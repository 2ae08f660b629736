"""Client du serveur de medias Plex."""
