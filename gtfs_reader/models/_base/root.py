class RootListMixin:
    """Mixin for containers of records that provides more pythonic access to members."""

    def __iter__(self):
        return iter(self.root)

    def __getitem__(self, item):
        return self.root[item]

    def __len__(self):
        return len(self.root)
