import uuid


def generate_scenario_id() -> str:
    # uuid4 carries 122 random bits from os.urandom; collisions are not checked
    # here, the unique index on scenario_metadata.uuid rejects them
    return str(uuid.uuid4())
