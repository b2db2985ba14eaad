from pymongo import ASCENDING, DESCENDING, MongoClient
from pymongo.errors import CollectionInvalid

from movies_api.core.config import settings

# persistence-side constraints; violations surface as WriteError
MOVIE_VALIDATOR = {
    "$jsonSchema": {
        "bsonType": "object",
        "required": ["_id", "title", "year_of_release", "date_added"],
        "properties": {
            "_id": {"bsonType": ["int", "long"]},
            "title": {"bsonType": "string", "minLength": 1},
            "year_of_release": {"bsonType": ["int", "long"],
                                "minimum": 1878},
            "date_added": {"bsonType": "date"},
            "reviews": {
                "bsonType": "array",
                "items": {
                    "bsonType": "object",
                    "required": ["id", "content", "movie_id"],
                    "properties": {
                        "content": {"bsonType": "string"},
                    },
                },
            },
        },
    }
}


def dump(db, col_name: str) -> None:
    print(f"\nIndexes in '{col_name}':")
    for i in db[col_name].list_indexes():
        print(" -", i)


def main():
    db = MongoClient(settings.mongo_dsn)[settings.mongo_db]

    print("Using DSN:", settings.mongo_dsn, "DB:", settings.mongo_db)

    try:
        db.create_collection("movies", validator=MOVIE_VALIDATOR)
    except CollectionInvalid:
        db.command("collMod", "movies", validator=MOVIE_VALIDATOR)

    # listing: title asc, stable tie-break on _id
    db["movies"].create_index(
        [("title", ASCENDING), ("_id", ASCENDING)],
        name="movies_title"
    )
    # date filter: range on date_added, sort by release year desc
    db["movies"].create_index(
        [("date_added", ASCENDING)],
        name="movies_date_added"
    )
    db["movies"].create_index(
        [("year_of_release", DESCENDING), ("_id", ASCENDING)],
        name="movies_year_desc"
    )

    dump(db, "movies")
    print("Indexes ensured.")


if __name__ == "__main__":
    main()
