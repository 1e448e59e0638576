class LowestIndexRng:
    """ Stands in for numpy's Generator, always drawing the lowest index. """

    def __init__(self):
        self.draws = []

    def integers(self, low, high):
        self.draws.append((low, high))
        return low


class FixedIndexRng:
    """ Replays the given indexes in order. """

    def __init__(self, indexes):
        self.indexes = list(indexes)

    def integers(self, low, high):
        index = self.indexes.pop(0)
        assert low <= index < high
        return index
