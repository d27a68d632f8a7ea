"""gql-validate: validate GraphQL query files against a live database."""

__version__ = "1.0.0"
