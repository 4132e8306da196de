__all__ = ["lazy"]


class lazy:
    """
    A wrapper for deferring the evaluation of an expression until its value is needed.

    Used for log arguments: ``logger.trace("data=<%s>", lazy(lambda: data.hex()))`` only formats
    ``data`` if a handler actually emits the record.
    """

    __slots__ = ["_object_", "_thunk_"]

    def __init__(self, thunk):
        object.__setattr__(self, "_object_", None)
        object.__setattr__(self, "_thunk_", thunk)

    def _force_(self):
        if self._thunk_ is not None:
            object.__setattr__(self, "_object_", self._thunk_())
            object.__setattr__(self, "_thunk_", None)
        return self._object_

    def __getattr__(self, attr):
        return getattr(self._force_(), attr)

    def __setattr__(self, attr, value):
        raise AttributeError(f"cannot set attribute {attr!r} on a lazy value")

    def __str__(self):
        return str(self._force_())

    def __format__(self, spec):
        return format(self._force_(), spec)

    def __eq__(self, other):
        return self._force_() == other

    def __hash__(self):
        return hash(self._force_())

    def __len__(self):
        return len(self._force_())

    def __bool__(self):
        return bool(self._force_())

    def __repr__(self):
        if self._thunk_ is not None:
            rep = repr(self._thunk_)
        else:
            rep = repr(self._object_)
        return f"<lazy {rep}>"
