tags_metadata = [
    {
        "name": "Crush",
        "description": "Запуск полного набора преобразований и оценка качества потока 64-битных чисел.",
    },
    {
        "name": "Sources",
        "description": "Встроенные генераторы и список преобразований набора.",
    },
    {
        "name": "Health",
        "description": "Проверка доступности сервиса.",
    },
]
