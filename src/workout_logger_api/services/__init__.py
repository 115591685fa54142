"""Services for normalizing workouts and writing them to Notion."""
