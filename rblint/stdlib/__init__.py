"""Built-in components that ship with rblint."""
