"""Remote sync collaborators: the sheets web-app client and the repository."""
