"""Domain layer: model, ports and the customer import core."""
