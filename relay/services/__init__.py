"""
Services the builders are composed from.

- pipeline/: the sequential task pipeline and option merging
- launcher/: starting auxiliary service targets
- driver/: browser-driver updates
- runner/: isolated subprocess execution and process cleanup
"""
