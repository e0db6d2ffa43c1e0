"""Survey definitions, ratings, part selection and scoring."""
