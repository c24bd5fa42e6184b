import logging
import sys

import currly
from currly import json_body_arg, path_arg

create_post = (
    currly.builder()
    .post()
    .https()
    .host("jsonplaceholder.typicode.com")
    .path_segment("posts")
    .build()
)

get_post = (
    currly.builder()
    .get()
    .https()
    .host("jsonplaceholder.typicode.com")
    .path_segment("posts")
    .path_param("id")
    .build()
)


def main():
    logging.basicConfig(level=logging.DEBUG if "-v" in sys.argv else logging.INFO)

    body = {
        "title": "Hi currly!",
        "body": "Hello, currly.",
        "userId": 42,
    }
    status, result, err = create_post(json_body_arg(body))
    if err is not None:
        print(err)
        sys.exit(42)

    print(status)
    print(result)

    status, result, err = get_post(path_arg("id", "1"))
    if err is not None:
        print(err)
        sys.exit(42)

    print(status)
    print(result)


if __name__ == "__main__":
    main()
