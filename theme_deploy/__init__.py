"""
Script: theme_deploy package
What: Holds the Python workflow that backs up, stages, and deploys storefront themes.
Doing: Groups the CLI entrypoints and the branch, theme, and deploy helpers in one importable package.
Why: Keeps deployment decisions readable and testable instead of burying them in one script.
Goal: Provide a clear, maintainable home for theme backup and deployment logic.
"""
