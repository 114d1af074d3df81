"""Initialize a Git repository: .gitignore, first commit, branch and remote."""
