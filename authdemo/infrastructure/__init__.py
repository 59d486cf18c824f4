"""Infrastructure: Firebase REST clients, Firestore stores and the admin proxy client."""
